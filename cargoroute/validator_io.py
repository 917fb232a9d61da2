"""Instance and solution files in the format of the external solution validator."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from cargoroute.geometry import Container, Fragility, Group, Rotation


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def _pad(value: Any, width: int) -> str:
    return _text(value).ljust(width)


def _columns(values: Sequence[Any], width: int) -> str:
    """Pad every value but the last to ``width``, separated by spaces."""
    head = [_pad(value, width) for value in values[:-1]]
    return " ".join([*head, _text(values[-1])]) + "\n"


def _entry(key: str, value: Any) -> str:
    return f"{_pad(key, 30)} {_text(value)}\n"


def _output_dir(folder_path: str) -> Path:
    path = Path(f"{folder_path}SolutionValidator/")
    path.mkdir(exist_ok=True)
    return path


def _fragile(item) -> int:
    return 0 if item.fragility == Fragility.NONE else 1


def write_input(
    folder_path: str,
    name: str,
    nodes: Sequence[Group],
    container: Container,
    number_containers: int,
) -> Path:
    """Write ``Instance_<name>.txt`` below ``<folder_path>SolutionValidator/``."""
    number_items = nodes[-1].items[-1].extern_id + 1
    parts = [
        _entry("Name", name),
        _entry("Number_of_Customers", len(nodes) - 1),
        _entry("Number_of_Items", number_items),
        _entry("Number_of_ItemTypes", number_items),
        _entry("Number_of_Vehicles", number_containers),
        _entry("TimeWindows", 0),
        "\nVEHICLE\n",
        _entry("Mass_Capacity", container.weight_limit),
        _entry("CargoSpace_Length", container.dx),
        _entry("CargoSpace_Width", container.dy),
        _entry("CargoSpace_Height", container.dz),
        _entry("Wheelbase", -1),
        _entry("Max_Mass_FrontAxle", -1),
        _entry("Max_Mass_RearAxle", -1),
        _entry("Distance_FrontAxle_CargoSpace", -1),
        "\nCUSTOMERS\n",
        _columns(
            ["i", "x", "y", "Demand", "ReadyTime", "DueDate", "ServiceTime",
             "DemandedMass", "DemandedVolume"],
            15,
        ),
    ]
    parts.extend(
        _columns(
            [node.intern_id, node.position_x, node.position_y, len(node.items), 0,
             1000000, 0, node.total_weight, node.total_volume],
            15,
        )
        for node in nodes
    )

    parts.append("\nITEMS\n")
    parts.append(
        _columns(
            ["Type", "Length", "Width", "Height", "Mass", "Fragility",
             "LoadingBearingStrength"],
            15,
        )
    )
    for node in nodes:
        for item in node.items:
            mass = node.total_weight / float(len(node.items))
            parts.append(
                "Bt" + _pad(item.intern_id + 1, 13) + " "
                + _columns([item.dx, item.dy, item.dz, mass, _fragile(item), 0], 15)
            )

    parts.append("\nDEMANDS PER CUSTOMER\n")
    parts.append(f"{_pad('i', 4)} {_pad('Type', 4)} {_pad('Quantity', 2)}\n")
    for node in nodes:
        if not node.items:
            continue
        demands = "".join(
            "Bt" + _pad(item.intern_id + 1, 2) + " " + _pad(1, 2) for item in node.items
        )
        parts.append(_pad(node.intern_id, 5) + demands + "\n")

    target = _output_dir(folder_path) / f"Instance_{name}.txt"
    target.write_text("".join(parts), encoding="utf-8")
    return target


def _route_lines(route_id: int, route: Sequence[Group]) -> Iterable[str]:
    number_items = sum(len(node.items) for node in route)
    sequence = "".join(f"{node.intern_id} " for node in route)
    yield "-" * 96 + "\n"
    yield _entry("Tour_Id:", route_id)
    yield _entry("No_of_Customers:", len(route))
    yield _entry("No_of_Items:", number_items)
    yield _entry("Customer_Sequence:", sequence)
    yield "\n"
    yield _columns(
        ["CustId", "Id", "TypeId", "Rotated", "x", "y", "z", "Length", "Width",
         "Height", "mass", "Fragility", "LoadingBearingStrength"],
        9,
    )
    for node in route:
        for item in node.items:
            mass = node.total_weight / float(len(node.items))
            yield _columns(
                [node.intern_id, item.intern_id + 1, item.intern_id + 1,
                 0 if item.rotated == Rotation.NONE else 1,
                 item.x, item.y, item.z, item.dx, item.dy, item.dz, mass,
                 _fragile(item), 0],
                9,
            )
    yield "\n"
    yield "\n"


def write_output(
    folder_path: str, name: str, routes: Sequence[Sequence[Group]], costs: float
) -> Path:
    """Write ``Solution_<name>.txt`` below ``<folder_path>SolutionValidator/``."""
    parts = [
        _entry("Name:", name),
        _entry("Problem:", "3L-CVRP"),
        _entry("Number_of_used_Vehicles:", len(routes)),
        _entry("Total_Travel_Distance:", float(costs)),
        _entry("Calculation_Time:", -1),
        _entry("Total_Iterations:", -1),
        _entry("ConstraintSet:", 1),
        "\n",
    ]
    for route_id, route in enumerate(routes, start=1):
        parts.extend(_route_lines(route_id, route))

    target = _output_dir(folder_path) / f"Solution_{name}.txt"
    target.write_text("".join(parts), encoding="utf-8")
    return target