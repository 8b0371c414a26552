# camera/camera.py
import math
import random
from core.vector import Vector3
from core.ray import Ray
from core.utils import random_in_unit_disk

class Camera:
    """
    Thin-lens camera. The basis and viewport are derived once at construction
    and never change afterwards, so one camera can be shared by all render
    workers.

    Args:
        look_from: Camera position.
        look_at: Point the camera looks at.
        up: Approximate up direction; must not be parallel to the view direction.
        vfov: Vertical field of view in degrees.
        aspect_ratio: Image width divided by image height.
        aperture: Lens diameter. 0 gives a pinhole camera.
        focus_dist: Distance to the plane in sharp focus.
    """
    def __init__(self, look_from: Vector3, look_at: Vector3, up: Vector3,
                 vfov: float, aspect_ratio: float, aperture: float = 0.0,
                 focus_dist: float = 1.0):
        if not 0.0 < vfov < 180.0:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {vfov}")
        if aspect_ratio <= 0.0:
            raise ValueError(f"aspect_ratio must be positive, got {aspect_ratio}")
        if aperture < 0.0:
            raise ValueError(f"aperture must be non-negative, got {aperture}")
        if focus_dist <= 0.0:
            raise ValueError(f"focus_dist must be positive, got {focus_dist}")

        view = look_from - look_at
        if view.near_zero():
            raise ValueError("look_from and look_at must differ")
        side = up.cross(view)
        if side.near_zero():
            raise ValueError("up must not be parallel to the view direction")

        self.position = look_from
        self.vfov = vfov
        self.aspect_ratio = aspect_ratio
        self.aperture = aperture
        self.focus_dist = focus_dist
        self.lens_radius = aperture / 2.0

        # Right-handed orthonormal basis; w points backwards from the view.
        self.w = view.normalize()
        self.u = side.normalize()
        self.v = self.w.cross(self.u)

        viewport_height = 2.0 * math.tan(math.radians(vfov) / 2)
        viewport_width = aspect_ratio * viewport_height

        # Scale by focus distance
        self.horizontal = self.u * viewport_width * focus_dist
        self.vertical = self.v * viewport_height * focus_dist
        self.lower_left_corner = (self.position -
                                  self.horizontal * 0.5 -
                                  self.vertical * 0.5 -
                                  self.w * focus_dist)

    def get_ray(self, s: float, t: float, rng: random.Random) -> Ray:
        """
        Generates the ray through normalized image-plane coordinates (s, t),
        (0, 0) being the lower-left corner, with a depth of field lens offset.
        """
        focal_point = (self.lower_left_corner +
                       self.horizontal * s +
                       self.vertical * t)
        if self.lens_radius <= 0:
            return Ray(self.position, focal_point - self.position)

        # Generate random point on lens
        rd = random_in_unit_disk(rng) * self.lens_radius
        offset = self.u * rd.x + self.v * rd.y

        ray_origin = self.position + offset
        return Ray(ray_origin, focal_point - ray_origin)

    def __repr__(self) -> str:
        return (f"Camera(position={self.position}, vfov={self.vfov}, "
                f"aperture={self.aperture}, focus_dist={self.focus_dist})")
