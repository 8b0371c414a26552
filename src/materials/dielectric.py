# materials/dielectric.py
import math
import random
from typing import Tuple
from core.ray import Ray
from core.vector import Vector3, WHITE
from core.utils import reflect, refract, schlick
from geometry.hittable import HitRecord
from materials.material import Material

class Dielectric(Material):
    """
    Clear dielectric (glass, water). Chooses between reflection and refraction
    with Schlick's Fresnel approximation; total internal reflection always
    reflects.

    An index of 1.0 matches the surrounding air. Such an interface has no
    Fresnel reflection at all, so rays always pass straight through and the
    object is invisible. Schlick's curve still rises toward grazing angles at
    ratio 1, so that case bypasses it.
    """
    def __init__(self, ref_idx: float):
        if ref_idx <= 0:
            raise ValueError(f"index of refraction must be positive, got {ref_idx}")
        self.ref_idx = ref_idx

    def reflectance(self, cos_theta: float, ni_over_nt: float) -> float:
        if self.ref_idx == 1.0:
            return 0.0
        return schlick(cos_theta, ni_over_nt)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> Tuple[Ray, Vector3]:
        attenuation = WHITE  # Glass doesn't absorb light

        # Determine if we're entering or exiting the material
        ni_over_nt = 1.0 / self.ref_idx if rec.front_face else self.ref_idx

        unit_direction = ray_in.direction.normalize()

        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = ni_over_nt * sin_theta > 1.0
        if cannot_refract or self.reflectance(cos_theta, ni_over_nt) > rng.random():
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, ni_over_nt)

        return Ray(rec.p, direction), attenuation

    def __repr__(self) -> str:
        return f"Dielectric(ref_idx={self.ref_idx})"
