"""
Placement math

Right-handed, Y-up, like glTF. Imported assets are laid out on the ground
plane: consecutive assets step along +X, rows advance along +Z.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Vec3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def scaled(self, factor: float) -> "Vec3":
        return Vec3(self.x * factor, self.y * factor, self.z * factor)

    def to_list(self) -> list:
        return [self.x, self.y, self.z]


@dataclass(frozen=True)
class Quat:
    """Rotation quaternion [w, x, y, z]"""
    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def identity(cls) -> "Quat":
        return cls()

    def to_list(self) -> list:
        return [self.w, self.x, self.y, self.z]


@dataclass(frozen=True)
class Placement:
    """Where an asset lands in the scene"""
    position: Vec3 = Vec3()
    rotation: Quat = Quat()

    def offset_by(self, offset: Vec3) -> "Placement":
        return Placement(self.position + offset, self.rotation)


def grid_offset(index: int, row_size: int, spacing: float = 1.0) -> Vec3:
    """Offset of cell ``index``: (index % row_size, 0, index // row_size) * spacing"""
    if row_size <= 0:
        raise ValueError(f"row_size must be positive, got {row_size}")
    if index < 0:
        raise ValueError(f"index must not be negative, got {index}")
    return Vec3(index % row_size, 0.0, index // row_size).scaled(spacing)


class GridLayoutCursor:
    """
    Hands out grid offsets for one batch.

    Advance it once per convertible file at dispatch time so offsets follow
    submission order no matter which conversion finishes first.
    """

    def __init__(self, row_size: int = 10, spacing: float = 1.0):
        if row_size <= 0:
            raise ValueError(f"row_size must be positive, got {row_size}")
        self.row_size = row_size
        self.spacing = spacing
        self.index = 0

    def next(self) -> Vec3:
        offset = grid_offset(self.index, self.row_size, self.spacing)
        self.index += 1
        return offset
