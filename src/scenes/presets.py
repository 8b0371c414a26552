# scenes/presets.py
from typing import Callable, Dict, Tuple
from core.vector import Vector3
from camera.camera import Camera
from geometry.sphere import Sphere
from geometry.mesh import Triangle, load_obj
from geometry.world import World
from materials.lambertian import Lambertian
from materials.metal import Metal
from materials.presets import ColorPresets, DielectricPresets, LightPresets, MetalPresets

Scene = Tuple[Camera, World]

def _focused_camera(look_from: Vector3, look_at: Vector3, vfov: float,
                    aspect_ratio: float, aperture: float) -> Camera:
    focus_dist = (look_from - look_at).length()
    return Camera(look_from, look_at, Vector3(0, 1, 0), vfov, aspect_ratio,
                  aperture, focus_dist)

def _ground(material) -> Sphere:
    return Sphere(Vector3(0, -100.5, -1), 100, material)

def _back_triangle(material) -> Triangle:
    n = Vector3(0, 0, 1)
    return Triangle(Vector3(-2.0, -1.0, -2.5), Vector3(0.0, 2.0, -2.5),
                    Vector3(2.0, -1.0, -2.5), material, n, n, n)

def single_sphere(aspect_ratio: float) -> Scene:
    """One diffuse sphere in front of a pinhole camera at the origin."""
    camera = Camera(Vector3(0, 0, 0), Vector3(0, 0, -1), Vector3(0, 1, 0),
                    90.0, aspect_ratio)
    world = World([Sphere(Vector3(0, 0, -1), 0.5, Lambertian(Vector3(0.8, 0.8, 0.8)))])
    return camera, world

def sphere_triangle(aspect_ratio: float) -> Scene:
    camera = _focused_camera(Vector3(1, 0, 0), Vector3(0, 0, -1), 75.0,
                             aspect_ratio, 1.0 / 16.0)
    world = World([
        _back_triangle(Metal(Vector3(0.8, 0.8, 0.8), glossiness=0.99)),
        Sphere(Vector3(0, 0, -1), 0.5, Lambertian(ColorPresets.WHITE)),
        _ground(Lambertian(ColorPresets.GREEN)),
    ])
    return camera, world

def sphere_triangle_light(aspect_ratio: float) -> Scene:
    camera = _focused_camera(Vector3(1, 0, 0), Vector3(0.4, 0.15, -1.0), 90.0,
                             aspect_ratio, 1.0 / 8.0)
    above, below = ColorPresets.NIGHT_SKY
    world = World([
        _back_triangle(Metal(Vector3(0.8, 0.8, 0.8), glossiness=0.99)),
        Sphere(Vector3(0, 0, -1), 0.5, Lambertian(ColorPresets.WHITE)),
        Sphere(Vector3(0, 2, -0.5), 0.3, LightPresets.warm_light(10.0)),
        _ground(Lambertian(ColorPresets.GREEN)),
    ], sky_color_above=above, sky_color_below=below)
    return camera, world

def glass_spheres(aspect_ratio: float) -> Scene:
    """Diffuse, glass and metal spheres side by side."""
    camera = _focused_camera(Vector3(0, 0.5, 1.5), Vector3(0, 0, -1), 60.0,
                             aspect_ratio, 0.0)
    above, below = ColorPresets.DAY_SKY
    world = World([
        _ground(ColorPresets.matte(ColorPresets.YELLOW)),
        Sphere(Vector3(0, 0, -1), 0.5, ColorPresets.matte(ColorPresets.BLUE)),
        Sphere(Vector3(-1, 0, -1), 0.5, DielectricPresets.glass()),
        Sphere(Vector3(1, 0, -1), 0.5, MetalPresets.gold()),
    ], sky_color_above=above, sky_color_below=below)
    return camera, world

def planet(aspect_ratio: float) -> Scene:
    """A small diffuse sphere lit only by one large distant light."""
    camera = Camera(Vector3(0, 0, 0), Vector3(0, 0, -1), Vector3(0, 1, 0),
                    55.0, aspect_ratio)
    above, below = ColorPresets.NIGHT_SKY
    world = World([
        Sphere(Vector3(0, 0, -3), 0.5, Lambertian(ColorPresets.WHITE)),
        Sphere(Vector3(-50, 50, -15), 45, LightPresets.daylight(2.0)),
    ], sky_color_above=above, sky_color_below=below)
    return camera, world

def obj_scene(path: str, material=None) -> Callable[[float], Scene]:
    """Builder for a scene with the mesh at path standing on a ground sphere."""
    if material is None:
        material = MetalPresets.chrome()

    def build(aspect_ratio: float) -> Scene:
        camera = _focused_camera(Vector3(0, 0.5, 1), Vector3(0, 0, -1), 90.0,
                                 aspect_ratio, 0.0)
        world = World(load_obj(path, material))
        world.add(Sphere(Vector3(0, -100.5, -1), 100, Lambertian(ColorPresets.GRAY)))
        return camera, world

    return build

SCENES: Dict[str, Callable[[float], Scene]] = {
    "single_sphere": single_sphere,
    "sphere_triangle": sphere_triangle,
    "sphere_triangle_light": sphere_triangle_light,
    "glass_spheres": glass_spheres,
    "planet": planet,
}
