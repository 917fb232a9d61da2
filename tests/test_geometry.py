import json
import sys

import pytest

from cargoroute.geometry import (
    Axis,
    Container,
    Cuboid,
    Fragility,
    Group,
    Orientation,
    Rotation,
    container_from_json,
    container_to_json,
    cuboid_from_json,
    cuboid_to_json,
    homogeneity_key,
)


def test_area_and_volume_follow_dimensions():
    item = Cuboid(dx=2, dy=3, dz=4)
    assert item.area == 6.0
    assert item.volume == 24.0


def test_contains_is_half_open():
    box = Cuboid(dx=2, dy=2, dz=2, x=1, y=1, z=1)
    assert box.contains(1, 1, 1)
    assert box.contains(2, 2, 2)
    assert not box.contains(3, 1, 1)
    assert not box.contains(0, 1, 1)


def test_set_position_moves_box():
    box = Cuboid(dx=1, dy=1, dz=1)
    box.set_position(5, 6, 7)
    assert (box.x, box.y, box.z) == (5, 6, 7)
    assert box.contains(5, 6, 7)


def test_set_orientation_updates_extents_and_rotation():
    item = Cuboid(dx=2, dy=3, dz=4)
    item.set_orientation(3, 2, 4, Rotation.YAW)
    assert (item.dx, item.dy, item.dz) == (3, 2, 4)
    assert item.rotated is Rotation.YAW


def test_determine_dimensions():
    item = Cuboid(dx=2, dy=3, dz=4)
    assert item.determine_dimensions(Orientation.NO_ROTATION) == (2, 3, 4)
    assert item.determine_dimensions(Orientation.ROTATION_Z) == (3, 2, 4)
    with pytest.raises(ValueError):
        item.determine_dimensions(Orientation.ROTATION_X)


def test_minimum_rotatable_dimension():
    item = Cuboid(dx=5, dy=3, dz=4)
    assert item.minimum_rotatable_dimension(Axis.X) == 3
    assert item.minimum_rotatable_dimension(Axis.Y) == 3
    assert item.minimum_rotatable_dimension(Axis.Z) == 4
    item.enable_horizontal_rotation = False
    assert item.minimum_rotatable_dimension(Axis.X) == 5
    assert item.minimum_rotatable_dimension(Axis.Y) == 3


def test_container_dimension_and_default_limit():
    container = Container(dx=10, dy=20, dz=30)
    assert container.dimension(Axis.X) == 10
    assert container.dimension(Axis.Y) == 20
    assert container.dimension(Axis.Z) == 30
    assert container.weight_limit == sys.float_info.max
    assert container.contains(9, 19, 29)
    assert not container.contains(10, 0, 0)


def test_homogeneity_key_ignores_yaw_rotation():
    a = Cuboid(dx=2, dy=3, dz=4, weight=10.7, group_id=1)
    b = Cuboid(dx=3, dy=2, dz=4, weight=10.2, group_id=1, rotated=Rotation.YAW)
    assert homogeneity_key(a) == homogeneity_key(b)
    assert len({homogeneity_key(a), homogeneity_key(b)}) == 1


def test_homogeneity_key_distinguishes_groups_and_fragility():
    a = Cuboid(dx=2, dy=3, dz=4, group_id=1)
    assert homogeneity_key(a) != homogeneity_key(Cuboid(dx=2, dy=3, dz=4, group_id=2))
    fragile = Cuboid(dx=2, dy=3, dz=4, group_id=1, fragility=Fragility.FRAGILE)
    assert homogeneity_key(a) != homogeneity_key(fragile)


def test_cuboid_json_names_enums():
    item = Cuboid(dx=1, dy=2, dz=3, fragility=Fragility.FRAGILE, rotated=Rotation.YAW)
    data = cuboid_to_json(item)
    assert data["Fragility"] == "Fragile"
    assert data["Rotated"] == "Yaw"
    assert set(data) == {
        "X", "Y", "Z", "Dx", "Dy", "Dz", "Weight",
        "EnableHorizontalRotation", "Fragility", "Rotated",
    }


def test_cuboid_json_round_trip():
    item = Cuboid(
        dx=4, dy=5, dz=6, x=1, y=2, z=3, weight=12.5,
        enable_horizontal_rotation=False,
        fragility=Fragility.FRAGILE, rotated=Rotation.YAW,
    )
    restored = cuboid_from_json(json.loads(json.dumps(cuboid_to_json(item))))
    assert restored == item


def test_cuboid_from_json_unknown_enum_name_falls_back_to_none():
    data = cuboid_to_json(Cuboid(dx=1, dy=1, dz=1))
    data["Fragility"] = "Brittle"
    data["Rotated"] = "Pitch"
    restored = cuboid_from_json(data)
    assert restored.fragility is Fragility.NONE
    assert restored.rotated is Rotation.NONE


def test_cuboid_from_json_requires_keys():
    data = cuboid_to_json(Cuboid(dx=1, dy=1, dz=1))
    del data["Weight"]
    with pytest.raises(KeyError):
        cuboid_from_json(data)


def test_container_json_round_trip():
    container = Container(dx=10, dy=20, dz=30, weight_limit=1000.0)
    data = container_to_json(container)
    assert data == {"Dx": 10, "Dy": 20, "Dz": 30, "WeightLimit": 1000.0}
    assert container_from_json(data) == container
    with pytest.raises(KeyError):
        container_from_json({"Dx": 1, "Dy": 1, "Dz": 1})


def test_group_items_are_independent():
    first = Group()
    second = Group()
    first.items.append(Cuboid(dx=1, dy=1, dz=1))
    assert second.items == []
    assert len(first.items) == 1