"""Loading flags, solver statuses and problem parameters for container loading."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class LoadingStatus(enum.Enum):
    """Outcome of a loading feasibility check."""

    INVALID = 0
    FEAS_OPT = 1
    INFEASIBLE = 2
    UNKNOWN = 3


class PackingType(enum.Enum):
    """Which subset of the loading constraints a check should respect."""

    NONE = 0
    COMPLETE = 1
    COMPLETE_NO_SEQUENCE = 2
    NO_LIFO = 3
    NO_SUPPORT = 4
    NO_FRAGILITY = 5
    NO_SUPPORT_NO_SEQUENCE = 6
    LIFO_NO_SEQUENCE = 7
    NO_SUPPORT_NO_LIFO = 8
    NO_SUPPORT_NO_FRAGILITY = 9
    LOADING_ONLY = 10


class LoadingFlag(enum.IntFlag):
    """Bit mask of active loading constraints."""

    NONE_SET = 0
    NO_OVERLAP = 1
    FRAGILITY = 1 << 1
    SUPPORT = 1 << 2
    LIFO = 1 << 3
    SEQUENCE = 1 << 4
    COMPLETE = NO_OVERLAP | FRAGILITY | SUPPORT | LIFO | SEQUENCE
    NO_FRAGILITY = NO_OVERLAP | SUPPORT | LIFO | SEQUENCE
    NO_LIFO = NO_OVERLAP | FRAGILITY | SUPPORT
    NO_SUPPORT = NO_OVERLAP | FRAGILITY | LIFO | SEQUENCE
    LIFO_NO_SEQUENCE = NO_OVERLAP | LIFO
    LIFO_SEQUENCE = NO_OVERLAP | LIFO | SEQUENCE
    FRAGILITY_ONLY = NO_OVERLAP | FRAGILITY
    LOADING_ONLY = 1


def is_set(mask: LoadingFlag, flag: LoadingFlag) -> bool:
    """Return whether the basic ``flag`` is present in ``mask``."""
    return (LoadingFlag(mask) & LoadingFlag(flag)) != LoadingFlag.NONE_SET


@dataclass
class CPSolverParams:
    """Settings for the constraint programming loading solver."""

    threads: int = 8
    seed: int = 0
    log_flag: bool = True
    presolve: bool = True
    enable_cumulative_dimensions: bool = False
    enable_no_overlap_2d_floor: bool = False


@dataclass
class ClassifierParams:
    """Settings for the learned feasibility classifier."""

    traced_model_path: str = ""
    serialize_json_mean_std: str = ""
    use_classifier: bool = False
    save_tensor_data: bool = False
    tensor_data_file_path: str = ""
    acceptance_threshold: float = 0.5


class VariantType(enum.Enum):
    """Problem variant that determines the active loading constraints."""

    NONE = 0
    ALL_CONSTRAINTS = 1
    NO_FRAGILITY = 2
    NO_SUPPORT = 3
    NO_LIFO = 4
    LOADING_ONLY = 5
    VOLUME_WEIGHT_APPROXIMATION = 6
    VOLUME = 7
    WEIGHT = 8


_VARIANT_NAMES = {
    VariantType.ALL_CONSTRAINTS: "AllConstraints",
    VariantType.LOADING_ONLY: "LoadingOnly",
    VariantType.NO_FRAGILITY: "NoFragility",
    VariantType.NO_LIFO: "NoLifo",
    VariantType.NO_SUPPORT: "NoSupport",
    VariantType.VOLUME: "Volume",
    VariantType.VOLUME_WEIGHT_APPROXIMATION: "VolumeWeightApproximation",
    VariantType.WEIGHT: "Weight",
}

# (three-dimensional, support area, support, lifo, fragility, flags or None to keep)
_VARIANT_SETTINGS = {
    VariantType.ALL_CONSTRAINTS: (True, 0.75, True, True, True, LoadingFlag.COMPLETE),
    VariantType.NO_FRAGILITY: (True, 0.75, True, True, False, LoadingFlag.NO_FRAGILITY),
    VariantType.NO_SUPPORT: (True, 0.0, False, True, True, LoadingFlag.NO_SUPPORT),
    VariantType.NO_LIFO: (True, 0.75, True, False, True, LoadingFlag.NO_LIFO),
    VariantType.LOADING_ONLY: (True, 0.0, False, False, False, LoadingFlag.LOADING_ONLY),
    VariantType.VOLUME_WEIGHT_APPROXIMATION: (False, 0.0, False, False, False, None),
    VariantType.VOLUME: (False, 0.0, False, False, False, None),
    VariantType.WEIGHT: (False, 0.0, False, False, False, None),
}


@dataclass
class LoadingProblemParams:
    """Describes which loading constraints a problem variant enforces."""

    variant: VariantType = VariantType.NONE
    loading_flags: LoadingFlag = LoadingFlag.NONE_SET
    enable_three_dimensional_loading: bool = False
    support_area: float = 0.0
    enable_support: bool = False
    enable_lifo: bool = False
    enable_fragility: bool = False

    def variant_string(self) -> str:
        """Return the textual name of the variant."""
        try:
            return _VARIANT_NAMES[self.variant]
        except KeyError:
            raise ValueError(
                f"Variant {self.variant.value} is an invalid problem variant."
            ) from None

    def set_flags(self) -> None:
        """Derive the constraint switches and flags from the variant."""
        try:
            settings = _VARIANT_SETTINGS[self.variant]
        except KeyError:
            raise ValueError("Problem variant not implemented.") from None
        (
            self.enable_three_dimensional_loading,
            self.support_area,
            self.enable_support,
            self.enable_lifo,
            self.enable_fragility,
            flags,
        ) = settings
        if flags is not None:
            self.loading_flags = flags


@dataclass
class ContainerLoadingParams:
    """All parameters of the container loading subproblem."""

    cp_solver: CPSolverParams = field(default_factory=CPSolverParams)
    loading_problem: LoadingProblemParams = field(default_factory=LoadingProblemParams)
    classifier_params: ClassifierParams = field(default_factory=ClassifierParams)