"""Cuboids, containers, customer item groups and their JSON form."""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass, field
from typing import Any


class Axis(enum.Enum):
    X = 0
    Y = 1
    Z = 2


class Orientation(enum.IntEnum):
    NO_ROTATION = 0
    ROTATION_Z = 1
    ROTATION_Y = 2
    ROTATION_YZ = 3
    ROTATION_XZ = 4
    ROTATION_X = 5


class Rotation(enum.Enum):
    """Rotations by 90 degrees."""

    NONE = 0
    YAW = 1  # horizontal rotation around the z-axis


class Fragility(enum.Enum):
    """Non-fragile items must not rest on fragile ones."""

    NONE = 0
    FRAGILE = 1


_ROTATION_NAMES = {Rotation.NONE: "None", Rotation.YAW: "Yaw"}
_FRAGILITY_NAMES = {Fragility.NONE: "None", Fragility.FRAGILE: "Fragile"}


@dataclass
class _Box:
    dx: int = 0
    dy: int = 0
    dz: int = 0
    x: int = 0
    y: int = 0
    z: int = 0

    @property
    def area(self) -> float:
        return float(self.dx) * float(self.dy)

    @property
    def volume(self) -> float:
        return float(self.dx) * float(self.dy) * float(self.dz)

    def _holds(self, x: int, y: int, z: int) -> bool:
        return (
            self.x <= x < self.x + self.dx
            and self.y <= y < self.y + self.dy
            and self.z <= z < self.z + self.dz
        )


@dataclass
class Cuboid(_Box):
    """An item to be loaded."""

    rotated: Rotation = Rotation.NONE
    fragility: Fragility = Fragility.NONE
    intern_id: int = 0
    extern_id: int = 0
    group_id: int = 0
    weight: float = 0.0
    enable_horizontal_rotation: bool = True
    require_floor_placement: bool = False

    def set_position(self, x: int, y: int, z: int) -> None:
        """Move the item so that its origin corner lies at (x, y, z)."""
        self.x, self.y, self.z = x, y, z

    def contains(self, x: int, y: int, z: int) -> bool:
        """Return whether the point lies inside the half-open item."""
        return self._holds(x, y, z)

    def set_orientation(
        self, dx: int, dy: int, dz: int, rotation: Rotation = Rotation.NONE
    ) -> None:
        """Set the extents and the rotation state."""
        self.dx, self.dy, self.dz = dx, dy, dz
        self.rotated = rotation

    def determine_dimensions(self, orientation: Orientation) -> tuple[int, int, int]:
        """Return the extents along x, y, z for the given orientation."""
        if orientation == Orientation.NO_ROTATION:
            return (self.dx, self.dy, self.dz)
        if orientation == Orientation.ROTATION_Z:
            return (self.dy, self.dx, self.dz)
        raise ValueError("Orientation not implemented.")

    def minimum_rotatable_dimension(self, axis: Axis) -> int:
        """Return the smallest extent the item can take along ``axis``."""
        if axis == Axis.X:
            return min(self.dx, self.dy) if self.enable_horizontal_rotation else self.dx
        if axis == Axis.Y:
            return min(self.dx, self.dy) if self.enable_horizontal_rotation else self.dy
        if axis == Axis.Z:
            return self.dz
        raise ValueError("Invalid axis.")


@dataclass
class Container(_Box):
    """A loading space with a weight limit."""

    weight_limit: float = sys.float_info.max

    def set_position(self, x: int, y: int, z: int) -> None:
        """Move the container so that its origin corner lies at (x, y, z)."""
        self.x, self.y, self.z = x, y, z

    def contains(self, x: int, y: int, z: int) -> bool:
        """Return whether the point lies inside the half-open container."""
        return self._holds(x, y, z)

    def dimension(self, axis: Axis) -> int:
        """Return the extent along ``axis``."""
        if axis == Axis.X:
            return self.dx
        if axis == Axis.Y:
            return self.dy
        if axis == Axis.Z:
            return self.dz
        raise ValueError("Invalid axis.")


@dataclass
class Group:
    """The items demanded at one location."""

    intern_id: int = 0
    extern_id: int = 0
    position_x: float = 0.0
    position_y: float = 0.0
    total_weight: float = 0.0
    total_volume: float = 0.0
    total_area: float = 0.0
    items: list[Cuboid] = field(default_factory=list)


def homogeneity_key(cuboid: Cuboid) -> tuple:
    """Key under which items of identical type compare and hash equal."""
    if cuboid.rotated == Rotation.YAW:
        dx, dy = cuboid.dy, cuboid.dx
    else:
        dx, dy = cuboid.dx, cuboid.dy
    return (
        dx,
        dy,
        cuboid.dz,
        cuboid.group_id,
        int(cuboid.weight),
        cuboid.fragility,
        cuboid.enable_horizontal_rotation,
        cuboid.require_floor_placement,
    )


def _enum_from_name(names: dict, value: Any, default: enum.Enum) -> enum.Enum:
    for member, name in names.items():
        if name == value:
            return member
    return default


def cuboid_to_json(item: Cuboid) -> dict[str, Any]:
    """Return the JSON object for an item."""
    return {
        "X": item.x,
        "Y": item.y,
        "Z": item.z,
        "Dx": item.dx,
        "Dy": item.dy,
        "Dz": item.dz,
        "Weight": item.weight,
        "EnableHorizontalRotation": item.enable_horizontal_rotation,
        "Fragility": _FRAGILITY_NAMES.get(item.fragility, "None"),
        "Rotated": _ROTATION_NAMES.get(item.rotated, "None"),
    }


def cuboid_from_json(data: dict[str, Any]) -> Cuboid:
    """Build an item from its JSON object; every key is required."""
    return Cuboid(
        x=int(data["X"]),
        y=int(data["Y"]),
        z=int(data["Z"]),
        dx=int(data["Dx"]),
        dy=int(data["Dy"]),
        dz=int(data["Dz"]),
        weight=float(data["Weight"]),
        enable_horizontal_rotation=bool(data["EnableHorizontalRotation"]),
        fragility=_enum_from_name(_FRAGILITY_NAMES, data["Fragility"], Fragility.NONE),
        rotated=_enum_from_name(_ROTATION_NAMES, data["Rotated"], Rotation.NONE),
    )


def container_to_json(container: Container) -> dict[str, Any]:
    """Return the JSON object for a container."""
    return {
        "Dx": container.dx,
        "Dy": container.dy,
        "Dz": container.dz,
        "WeightLimit": container.weight_limit,
    }


def container_from_json(data: dict[str, Any]) -> Container:
    """Build a container from its JSON object; every key is required."""
    return Container(
        dx=int(data["Dx"]),
        dy=int(data["Dy"]),
        dz=int(data["Dz"]),
        weight_limit=float(data["WeightLimit"]),
    )