# geometry/__init__.py
from geometry.hittable import Hittable, HitRecord
from geometry.sphere import Sphere
from geometry.mesh import Triangle, ObjParseError, load_obj
from geometry.world import World

__all__ = [
    "Hittable",
    "HitRecord",
    "Sphere",
    "Triangle",
    "ObjParseError",
    "load_obj",
    "World",
]
