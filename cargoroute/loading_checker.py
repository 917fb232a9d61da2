"""Loading feasibility checks for routes, backed by a result cache."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from typing import Protocol

from cargoroute.feasibility_cache import FeasibilityCache
from cargoroute.flags import (
    ContainerLoadingParams,
    CPSolverParams,
    LoadingFlag,
    LoadingStatus,
    PackingType,
)
from cargoroute.geometry import Container, Cuboid, Group


class PackingSolver(Protocol):
    """Decides whether items fit into a container under a loading mask."""

    def __call__(
        self,
        params: CPSolverParams,
        container: Container,
        items: Sequence[Cuboid],
        number_stops: int,
        mask: LoadingFlag,
        support_area: float,
        max_runtime: float,
    ) -> LoadingStatus: ...


class RouteClassifier(Protocol):
    """Predicts whether a route's items are likely to be loadable."""

    def classify(
        self, items: Sequence[Cuboid], route: Sequence[int], container: Container
    ) -> bool: ...


BinPackingBound = Callable[[int], int]

_PACKING_MASKS = {
    PackingType.COMPLETE: LoadingFlag.COMPLETE,
    PackingType.NO_SUPPORT: LoadingFlag.NO_SUPPORT,
    PackingType.LIFO_NO_SEQUENCE: LoadingFlag.LIFO_NO_SEQUENCE,
}


class LoadingChecker:
    """Checks routes for loading feasibility and remembers the outcomes.

    ``solver`` performs the actual packing check. ``classifier`` is required
    when the classifier is enabled in the parameters. ``bin_packing`` returns a
    lower bound on the number of vehicles for a set of customers (bit mask) and
    is used when lifting is enabled.
    """

    def __init__(
        self,
        parameters: ContainerLoadingParams,
        max_runtime: float,
        solver: PackingSolver,
        classifier: RouteClassifier | None = None,
        bin_packing: BinPackingBound | None = None,
    ) -> None:
        self.parameters = parameters
        self.max_runtime = max_runtime
        self._solver = solver
        self._bin_packing = bin_packing
        if parameters.classifier_params.use_classifier and classifier is None:
            raise ValueError("The classifier is enabled but none was given.")
        self._classifier = classifier
        self._cache = FeasibilityCache(parameters.loading_problem.loading_flags)
        # Customer sets that need at least two vehicles.
        self.infeasible_combinations: list[int] = []

    @property
    def _flags(self) -> LoadingFlag:
        return LoadingFlag(self.parameters.loading_problem.loading_flags)

    def select_items(
        self, node_ids: Sequence[int], nodes: Sequence[Group], reversed_direction: bool
    ) -> list[Cuboid]:
        """Collect the items of the given stops, tagging each with its loading group.

        Without reversal the last stop gets group 0; with reversal the first does.
        The group ids are also written to the items held by ``nodes``.
        """
        count = len(node_ids)
        selected: list[Cuboid] = []
        for position, node_id in enumerate(node_ids):
            group_id = position if reversed_direction else count - 1 - position
            for item in nodes[node_id].items:
                item.group_id = group_id
                selected.append(_copy_cuboid(item))
        return selected

    def build_mask(self, packing_type: PackingType) -> LoadingFlag:
        """Return the active loading flags for a packing type."""
        try:
            base = _PACKING_MASKS[packing_type]
        except KeyError:
            raise ValueError("PackingType not implemented in mask builder.") from None
        return base & self._flags

    def constraint_programming_solver(
        self,
        packing_type: PackingType,
        container: Container,
        node_set: int,
        stop_ids: Sequence[int],
        items: Sequence[Cuboid],
        is_call_type_exact: bool,
    ) -> LoadingStatus:
        """Return the loading status, from the cache when possible, else from the solver."""
        mask = self.build_mask(packing_type)
        cached = self._cache.precheck_status(stop_ids, node_set, mask, is_call_type_exact)
        if cached != LoadingStatus.INVALID:
            return cached

        status = self._solver(
            self.parameters.cp_solver,
            container,
            items,
            len(stop_ids),
            mask,
            self.parameters.loading_problem.support_area,
            self.max_runtime,
        )
        if status == LoadingStatus.INVALID:
            raise RuntimeError("Loading status invalid in CP model!")
        if is_call_type_exact and status == LoadingStatus.UNKNOWN:
            return LoadingStatus.INVALID

        self._cache.add_status(stop_ids, node_set, mask, status)
        return status

    def complete_check(
        self,
        container: Container,
        node_set: int,
        stop_ids: Sequence[int],
        items: Sequence[Cuboid],
    ) -> bool:
        """Return whether the route is loadable under all active constraints."""
        if self.route_is_in_feas_sequences(stop_ids):
            return True
        if self.route_is_in_infeas_sequences(stop_ids):
            return False
        if self.parameters.classifier_params.use_classifier:
            assert self._classifier is not None
            if not self._classifier.classify(items, stop_ids, container):
                return False
        status = self.constraint_programming_solver(
            PackingType.COMPLETE, container, node_set, stop_ids, items, False
        )
        return status == LoadingStatus.FEAS_OPT

    def determine_min_vehicles(
        self,
        enable_lifting: bool,
        lifting_threshold: float,
        container: Container,
        nodes: int,
        weight: float,
        volume: float,
    ) -> int:
        """Lower bound on the vehicles needed for the customer set ``nodes``."""
        weight_ratio = weight / container.weight_limit if container.weight_limit > 1 else 0.0
        volume_ratio = volume / container.volume if container.volume > 1 else 0.0
        z = max(weight_ratio, volume_ratio)
        r = math.ceil(z)
        if not enable_lifting or r == 1 or r - z > lifting_threshold:
            return r
        if self._bin_packing is None:
            raise RuntimeError("No bin packing model has been set.")
        return self._bin_packing(nodes)

    def customer_combination_infeasible(self, customers_in_route: int) -> bool:
        """Whether the route contains a known infeasible customer combination."""
        return any(
            customers_in_route & combination == combination
            for combination in self.infeasible_combinations
        )

    def add_infeasible_combination(self, customers_in_route: int) -> None:
        """Remember a customer set that cannot be served by one vehicle."""
        self.infeasible_combinations.append(customers_in_route)

    def feasible_routes(self) -> list[list[int]]:
        """All routes found feasible under the complete set of flags, in order."""
        return [list(route) for route in self._cache.feasible_routes]

    def add_feasible_sequence_from_outside(self, route: Sequence[int]) -> None:
        """Record a route known to be feasible."""
        self._cache.add_feasible_route(route)

    def route_is_in_feas_sequences(self, route: Sequence[int]) -> bool:
        return self._cache.sequence_is_feasible(route, self._flags)

    def route_is_in_infeas_sequences(self, route: Sequence[int]) -> bool:
        return self._cache.sequence_is_infeasible(route, self._flags)


def _copy_cuboid(item: Cuboid) -> Cuboid:
    return Cuboid(
        dx=item.dx,
        dy=item.dy,
        dz=item.dz,
        x=item.x,
        y=item.y,
        z=item.z,
        rotated=item.rotated,
        fragility=item.fragility,
        intern_id=item.intern_id,
        extern_id=item.extern_id,
        group_id=item.group_id,
        weight=item.weight,
        enable_horizontal_rotation=item.enable_horizontal_rotation,
        require_floor_placement=item.require_floor_placement,
    )