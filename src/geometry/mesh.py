# geometry/mesh.py
import os
from typing import List, Tuple, Optional
from core.vector import Vector3
from core.ray import Ray
from geometry.hittable import Hittable, HitRecord

# Determinant / distance threshold for the Möller–Trumbore test.
TRIANGLE_EPSILON = 1e-7

class Triangle(Hittable):
    """
    A single triangle primitive. If per-vertex normals are given the shading
    normal is interpolated across the face (smooth shading), otherwise the
    flat face normal is used.
    """
    def __init__(self,
                 v0: Vector3, v1: Vector3, v2: Vector3,
                 material,
                 n0: Optional[Vector3] = None, n1: Optional[Vector3] = None,
                 n2: Optional[Vector3] = None):
        self.v0 = v0
        self.v1 = v1
        self.v2 = v2
        self.material = material

        given = [n is not None for n in (n0, n1, n2)]
        if any(given) and not all(given):
            raise ValueError("Triangle needs either all three vertex normals or none")
        self.n0 = n0
        self.n1 = n1
        self.n2 = n2

        self.edge1 = v1 - v0
        self.edge2 = v2 - v0
        self.face_normal = self.edge1.cross(self.edge2).normalize()

    @property
    def smooth(self) -> bool:
        return self.n0 is not None

    def get_normal(self, u: float, v: float) -> Vector3:
        """Interpolate normal at the given barycentric coordinates."""
        if not self.smooth:
            return self.face_normal
        w = 1.0 - u - v
        return (self.n0 * w + self.n1 * u + self.n2 * v).normalize()

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        # Möller–Trumbore intersection algorithm
        h = ray.direction.cross(self.edge2)
        a = self.edge1.dot(h)

        # If ray is parallel to triangle
        if abs(a) < TRIANGLE_EPSILON:
            return None

        f = 1.0 / a
        s = ray.origin - self.v0
        u = f * s.dot(h)
        if u < 0.0 or u > 1.0:
            return None

        q = s.cross(self.edge1)
        v = f * ray.direction.dot(q)
        if v < 0.0 or u + v > 1.0:
            return None

        t = f * self.edge2.dot(q)

        # Intersection is behind ray origin or outside the interval
        if t <= TRIANGLE_EPSILON or t < t_min or t > t_max:
            return None

        normal = self.get_normal(u, v)
        if normal.near_zero():
            return None

        rec = HitRecord()
        rec.t = t
        rec.p = ray.at(t)
        rec.set_face_normal(ray, normal)
        rec.material = self.material
        rec.u = u
        rec.v = v
        return rec

    def __repr__(self) -> str:
        return f"Triangle({self.v0}, {self.v1}, {self.v2}, smooth={self.smooth})"


class ObjParseError(ValueError):
    """Raised for malformed Wavefront .obj input."""
    def __init__(self, filename: str, line_num: int, message: str):
        super().__init__(f"{filename}:{line_num}: {message}")
        self.filename = filename
        self.line_num = line_num


def _resolve_index(raw: str, count: int) -> int:
    """Turns a 1-based (or negative, relative) .obj index into a list index."""
    index = int(raw)
    if index > 0:
        index -= 1
    elif index < 0:
        index += count
    else:
        raise IndexError("index 0 is not valid in .obj files")
    if index < 0 or index >= count:
        raise IndexError(f"index {raw} out of range (have {count})")
    return index


def _parse_vector(values: List[str]) -> Vector3:
    if len(values) < 4:
        raise ValueError(f"expected 3 components, got {len(values) - 1}")
    return Vector3(float(values[1]), float(values[2]), float(values[3]))


def load_obj(filename: str, material, scale: float = 1.0,
             offset: Optional[Vector3] = None) -> List[Triangle]:
    """
    Load the triangles of a Wavefront .obj file.

    Faces with more than three vertices are fan-triangulated. Vertex normals
    are used for smooth shading when every vertex of a face references one.
    Vertices are scaled, then translated by offset, into world space.

    Raises:
        FileNotFoundError: If the file does not exist.
        ObjParseError: On any malformed vertex, normal or face line.
    """
    if not os.path.exists(filename):
        raise FileNotFoundError(f"Mesh file not found: {filename}")
    if offset is None:
        offset = Vector3(0, 0, 0)

    vertices: List[Vector3] = []
    normals: List[Vector3] = []
    triangles: List[Triangle] = []

    with open(filename, 'r') as f:
        for line_num, line in enumerate(f, 1):
            values = line.split()
            if not values or values[0].startswith('#'):
                continue

            try:
                if values[0] == 'v':
                    vertices.append(_parse_vector(values) * scale + offset)
                elif values[0] == 'vn':
                    normals.append(_parse_vector(values))
                elif values[0] == 'f':
                    triangles.extend(_parse_face(values[1:], vertices, normals, material))
            except (ValueError, IndexError) as e:
                raise ObjParseError(filename, line_num, str(e)) from e

    print(f"Loaded {filename}: {len(vertices)} vertices, {len(normals)} normals, "
          f"{len(triangles)} triangles")
    return triangles


def _parse_face(groups: List[str], vertices: List[Vector3], normals: List[Vector3],
                material) -> List[Triangle]:
    # format: f v1/vt1/vn1 v2/vt2/vn2 v3/vt3/vn3 (texture and normal optional)
    if len(groups) < 3:
        raise ValueError(f"face needs at least 3 vertices, got {len(groups)}")

    corners: List[Tuple[Vector3, Optional[Vector3]]] = []
    for group in groups:
        indices = group.split('/')
        position = vertices[_resolve_index(indices[0], len(vertices))]
        normal = None
        if len(indices) > 2 and indices[2]:
            normal = normals[_resolve_index(indices[2], len(normals))]
        corners.append((position, normal))

    smooth = all(n is not None for _, n in corners)
    triangles = []
    for i in range(1, len(corners) - 1):
        (p0, n0), (p1, n1), (p2, n2) = corners[0], corners[i], corners[i + 1]
        if smooth:
            triangles.append(Triangle(p0, p1, p2, material, n0, n1, n2))
        else:
            triangles.append(Triangle(p0, p1, p2, material))
    return triangles
