# renderer/integrator.py
import math
import random
from core.ray import Ray
from core.vector import Color, Vector3
from geometry.world import World

# Minimum hit distance; keeps a scattered ray from hitting the surface it left.
T_MIN = 0.001
T_MAX = math.inf

def ray_color(ray: Ray, world: World, max_depth: int, rng: random.Random) -> Color:
    """
    Path-traced radiance arriving along ray.

    Each bounce adds the emission of the surface hit, weighted by the
    attenuation product of the path so far, then continues along the scattered
    ray. The camera ray has depth 0; paths are cut off (contribute black)
    beyond max_depth bounces, when a material absorbs, and end with the sky
    color when nothing is hit. This is the loop form of

        color(r, d) = 0                                   if d > max_depth
                    = emitted + attenuation * color(r', d + 1)   on scatter
                    = emitted                             on absorption
                    = world.ambient_color(r)              on a miss
    """
    color = Vector3(0.0, 0.0, 0.0)
    throughput = Vector3(1.0, 1.0, 1.0)

    for _ in range(max_depth + 1):
        rec = world.hit(ray, T_MIN, T_MAX)
        if rec is None:
            return color + throughput * world.ambient_color(ray)

        color = color + throughput * rec.material.emitted(rec)

        scattered = rec.material.scatter(ray, rec, rng)
        if scattered is None:
            return color

        ray, attenuation = scattered
        throughput = throughput * attenuation

    return color
