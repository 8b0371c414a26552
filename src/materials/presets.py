# materials/presets.py
from core.vector import Vector3
from materials.metal import Metal
from materials.lambertian import Lambertian
from materials.dielectric import Dielectric
from materials.light import Light

class MetalPresets:
    """Metals by tint; glossiness 1 is a perfect mirror."""

    @staticmethod
    def gold() -> Metal:
        return Metal(Vector3(1.0, 0.78, 0.34), glossiness=0.9)

    @staticmethod
    def chrome() -> Metal:
        return Metal(Vector3(0.9, 0.9, 0.9), glossiness=0.99)

    @staticmethod
    def mirror() -> Metal:
        return Metal(Vector3(0.95, 0.95, 0.95), glossiness=1.0)

    @staticmethod
    def brushed(tint: Vector3 = Vector3(0.8, 0.8, 0.8)) -> Metal:
        return Metal(tint, glossiness=0.7)

class DielectricPresets:
    """Clear media by index of refraction."""

    @staticmethod
    def glass() -> Dielectric:
        return Dielectric(1.52)

    @staticmethod
    def diamond() -> Dielectric:
        return Dielectric(2.42)

    @staticmethod
    def air() -> Dielectric:
        # Index-matched with the surrounding air, so it does not show up at all
        return Dielectric(1.0)

class LightPresets:
    """Emitters; intensity scales the emission above 1.0 for small lights."""

    @staticmethod
    def warm_light(intensity: float = 1.0) -> Light:
        return Light(Vector3(1.0, 0.95, 0.9) * intensity)

    @staticmethod
    def daylight(intensity: float = 1.0) -> Light:
        return Light(Vector3(1.0, 1.0, 1.0) * intensity)

class ColorPresets:
    """Albedos and sky gradients used by the built-in scenes."""

    RED = Vector3(0.8, 0.3, 0.3)
    GREEN = Vector3(0.2, 0.8, 0.2)
    BLUE = Vector3(0.1, 0.2, 0.5)
    YELLOW = Vector3(0.8, 0.8, 0.0)
    WHITE = Vector3(0.8, 0.8, 0.8)
    GRAY = Vector3(0.6, 0.6, 0.6)

    # (above, below) pairs for World
    DAY_SKY = (Vector3(0.5, 0.7, 1.0), Vector3(1.0, 1.0, 1.0))
    NIGHT_SKY = (Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 0.0))

    @staticmethod
    def matte(color: Vector3) -> Lambertian:
        return Lambertian(color)
