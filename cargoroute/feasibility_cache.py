"""Memory of loading checks, by sequence of stops or by set of customers."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from cargoroute.flags import LoadingFlag, LoadingStatus, is_set

_USED_FLAGS = (
    LoadingFlag.COMPLETE,
    LoadingFlag.NO_SUPPORT,
    LoadingFlag.LIFO_NO_SEQUENCE,
)


def make_bitset(size: int, sequence: Iterable[int]) -> int:
    """Return an integer bit mask of ``size`` bits with each id in ``sequence`` set."""
    bits = 0
    for node_id in sequence:
        if not 0 <= node_id < size:
            raise IndexError(f"Id {node_id} outside bitset of size {size}.")
        bits |= 1 << node_id
    return bits


@dataclass
class _MaskRecords:
    feasible_sets: list[int] = field(default_factory=list)
    infeasible_sets: list[int] = field(default_factory=list)
    unknown_sets: list[int] = field(default_factory=list)
    feasible_sequences: set[tuple[int, ...]] = field(default_factory=set)
    infeasible_sequences: set[tuple[int, ...]] = field(default_factory=set)
    unknown_sequences: set[tuple[int, ...]] = field(default_factory=set)


class FeasibilityCache:
    """Stores the outcome of loading checks per loading mask.

    When the mask contains the sequence flag, results are stored per ordered
    sequence of stops; otherwise per set of customers, encoded as a bit mask.
    """

    def __init__(self, loading_flags: LoadingFlag) -> None:
        self.loading_flags = LoadingFlag(loading_flags)
        self.feasible_routes: list[list[int]] = []
        self._by_mask: dict[LoadingFlag, _MaskRecords] = {}
        for flag in _USED_FLAGS:
            self._by_mask.setdefault(flag & self.loading_flags, _MaskRecords())

    def _records(self, mask: LoadingFlag) -> _MaskRecords:
        try:
            return self._by_mask[LoadingFlag(mask)]
        except KeyError:
            raise KeyError(f"No records for loading mask {mask!r}.") from None

    def _records_for_update(self, mask: LoadingFlag) -> _MaskRecords:
        return self._by_mask.setdefault(LoadingFlag(mask), _MaskRecords())

    def add_feasible_route(self, route: Sequence[int]) -> None:
        """Record a route as feasible under the full set of loading flags."""
        self._records_for_update(self.loading_flags).feasible_sequences.add(tuple(route))
        self.feasible_routes.append(list(route))

    def sequence_is_feasible(self, sequence: Sequence[int], mask: LoadingFlag) -> bool:
        return tuple(sequence) in self._records(mask).feasible_sequences

    def sequence_is_infeasible(self, sequence: Sequence[int], mask: LoadingFlag) -> bool:
        return tuple(sequence) in self._records(mask).infeasible_sequences

    def sequence_is_unknown(self, sequence: Sequence[int], mask: LoadingFlag) -> bool:
        return tuple(sequence) in self._records(mask).unknown_sequences

    def set_is_feasible(self, node_set: int, mask: LoadingFlag) -> bool:
        """Without support, any subset of a feasible set is feasible; with it, only exact matches."""
        sets = self._records(mask).feasible_sets
        if not is_set(mask, LoadingFlag.SUPPORT):
            return any(node_set & feasible == node_set for feasible in sets)
        return node_set in sets

    def set_is_infeasible(self, node_set: int, mask: LoadingFlag) -> bool:
        """Without support, any superset of an infeasible set is infeasible; with it, only exact matches."""
        sets = self._records(mask).infeasible_sets
        if not is_set(mask, LoadingFlag.SUPPORT):
            return any(node_set & infeasible == infeasible for infeasible in sets)
        return node_set in sets

    def set_is_unknown(self, node_set: int, mask: LoadingFlag) -> bool:
        return node_set in self._records(mask).unknown_sets

    def precheck_status(
        self,
        sequence: Sequence[int],
        node_set: int,
        mask: LoadingFlag,
        is_call_type_exact: bool,
    ) -> LoadingStatus:
        """Return the stored status, or ``LoadingStatus.INVALID`` when nothing is known."""
        if is_set(mask, LoadingFlag.SEQUENCE):
            if self.sequence_is_infeasible(sequence, mask):
                return LoadingStatus.INFEASIBLE
            if self.sequence_is_feasible(sequence, mask):
                return LoadingStatus.FEAS_OPT
            if not is_call_type_exact and self.sequence_is_unknown(sequence, mask):
                return LoadingStatus.UNKNOWN
        else:
            if self.set_is_infeasible(node_set, mask):
                return LoadingStatus.INFEASIBLE
            if self.set_is_feasible(node_set, mask):
                if mask == self.loading_flags and not self.sequence_is_feasible(
                    sequence, mask
                ):
                    self.add_feasible_route(sequence)
                return LoadingStatus.FEAS_OPT
            if not is_call_type_exact and self.set_is_unknown(node_set, mask):
                return LoadingStatus.UNKNOWN
        return LoadingStatus.INVALID

    def add_status(
        self,
        sequence: Sequence[int],
        node_set: int,
        mask: LoadingFlag,
        status: LoadingStatus,
    ) -> None:
        """Remember the outcome of a check under ``mask``."""
        if status == LoadingStatus.FEAS_OPT and mask == self.loading_flags:
            # Kept as a sequence even without LIFO; the set partitioning heuristic needs it.
            self.add_feasible_route(sequence)
            if not is_set(mask, LoadingFlag.LIFO):
                self._records_for_update(mask).feasible_sets.append(node_set)
            return

        records = self._records_for_update(mask)
        if is_set(mask, LoadingFlag.SEQUENCE):
            targets = {
                LoadingStatus.FEAS_OPT: records.feasible_sequences,
                LoadingStatus.INFEASIBLE: records.infeasible_sequences,
                LoadingStatus.UNKNOWN: records.unknown_sequences,
            }
            if status not in targets:
                raise ValueError("LoadingStatus invalid!")
            targets[status].add(tuple(sequence))
        else:
            set_targets = {
                LoadingStatus.FEAS_OPT: records.feasible_sets,
                LoadingStatus.INFEASIBLE: records.infeasible_sets,
                LoadingStatus.UNKNOWN: records.unknown_sets,
            }
            if status not in set_targets:
                raise ValueError("LoadingStatus invalid!")
            set_targets[status].append(node_set)