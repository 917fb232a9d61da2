"""Nodes, vehicles, routes and the routing instance with its distances."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from cargoroute.geometry import Container, Group


@dataclass
class Node(Group):
    """A depot or customer; ``intern_id`` is its index in the instance's nodes."""


@dataclass
class Arc:
    """A weighted directed edge between two nodes."""

    coefficient: float
    tail: int
    head: int


@dataclass
class Route:
    """A vehicle route given as the intern ids of the visited customers."""

    id: int
    sequence: list[int] = field(default_factory=list)
    total_volume: float = 0.0
    total_weight: float = 0.0


@dataclass
class Vehicle:
    """A vehicle and the containers it carries."""

    intern_id: int = 0
    containers: list[Container] = field(default_factory=list)
    volume: float = 0.0


@dataclass
class Instance:
    """A routing problem: vehicles, depot and customers, with Euclidean distances."""

    name: str
    vehicles: list[Vehicle]
    nodes: list[Node]
    depot_index: int = 0
    lower_bound_vehicles: int = 0
    customer_ids: list[int] = field(init=False)
    total_no_items: int = field(init=False)
    _distances: dict[int, dict[int, float]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._distances = {
            tail.intern_id: {
                head.intern_id: math.hypot(
                    tail.position_x - head.position_x,
                    tail.position_y - head.position_y,
                )
                for head in self.nodes
            }
            for tail in self.nodes
        }
        self.total_no_items = sum(len(node.items) for node in self.nodes)
        self.customer_ids = [node.intern_id for node in self.nodes[1:]]

    def distance(self, tail: int, head: int) -> float:
        """Distance between two nodes given by intern id; KeyError if unknown."""
        return self._distances[tail][head]

    def customers(self) -> list[Node]:
        """All nodes except the first, which is the depot."""
        return self.nodes[1:]

    def depot_id(self) -> int:
        """Intern id of the depot node."""
        return self.nodes[self.depot_index].intern_id