import pytest

from cargoroute.flags import (
    ClassifierParams,
    ContainerLoadingParams,
    CPSolverParams,
    LoadingFlag,
    LoadingProblemParams,
    LoadingStatus,
    PackingType,
    VariantType,
    is_set,
)


BASIC_FLAGS = [
    LoadingFlag.NO_OVERLAP,
    LoadingFlag.FRAGILITY,
    LoadingFlag.SUPPORT,
    LoadingFlag.LIFO,
    LoadingFlag.SEQUENCE,
]


@pytest.mark.parametrize("flag", BASIC_FLAGS)
def test_complete_contains_every_basic_flag(flag):
    assert is_set(LoadingFlag.COMPLETE, flag)


def test_composite_flags_hold_exactly_their_basic_flags():
    lifo_no_sequence = [flag for flag in BASIC_FLAGS if is_set(LoadingFlag.LIFO_NO_SEQUENCE, flag)]
    assert lifo_no_sequence == [LoadingFlag.NO_OVERLAP, LoadingFlag.LIFO]
    loading_only = [flag for flag in BASIC_FLAGS if is_set(LoadingFlag.LOADING_ONLY, flag)]
    assert loading_only == [LoadingFlag.NO_OVERLAP]


def test_is_set_detects_basic_flags():
    assert is_set(LoadingFlag.COMPLETE, LoadingFlag.SUPPORT)
    assert not is_set(LoadingFlag.NO_SUPPORT, LoadingFlag.SUPPORT)
    assert is_set(LoadingFlag.NO_LIFO, LoadingFlag.FRAGILITY)
    assert not is_set(LoadingFlag.NO_LIFO, LoadingFlag.SEQUENCE)
    assert not is_set(LoadingFlag.NONE_SET, LoadingFlag.NO_OVERLAP)


def test_mask_intersection_with_problem_flags():
    mask = LoadingFlag.NO_SUPPORT & LoadingFlag.NO_FRAGILITY
    assert is_set(mask, LoadingFlag.LIFO)
    assert not is_set(mask, LoadingFlag.SUPPORT)
    assert not is_set(mask, LoadingFlag.FRAGILITY)


def test_status_and_packing_enums_start_at_zero():
    assert LoadingStatus(0) is LoadingStatus.INVALID
    assert PackingType(0) is PackingType.NONE


def test_solver_and_classifier_defaults():
    cp = CPSolverParams()
    assert cp.threads == 8
    assert cp.presolve is True
    classifier = ClassifierParams()
    assert classifier.acceptance_threshold == 0.5
    assert classifier.use_classifier is False


def test_container_loading_params_have_independent_defaults():
    first = ContainerLoadingParams()
    second = ContainerLoadingParams()
    first.loading_problem.enable_lifo = True
    assert second.loading_problem.enable_lifo is False


@pytest.mark.parametrize(
    "variant, name",
    [
        (VariantType.ALL_CONSTRAINTS, "AllConstraints"),
        (VariantType.LOADING_ONLY, "LoadingOnly"),
        (VariantType.NO_FRAGILITY, "NoFragility"),
        (VariantType.NO_LIFO, "NoLifo"),
        (VariantType.NO_SUPPORT, "NoSupport"),
        (VariantType.VOLUME, "Volume"),
        (VariantType.VOLUME_WEIGHT_APPROXIMATION, "VolumeWeightApproximation"),
        (VariantType.WEIGHT, "Weight"),
    ],
)
def test_variant_string(variant, name):
    assert LoadingProblemParams(variant=variant).variant_string() == name


def test_variant_string_rejects_none():
    with pytest.raises(ValueError, match="invalid problem variant"):
        LoadingProblemParams().variant_string()


def test_set_flags_all_constraints():
    params = LoadingProblemParams(variant=VariantType.ALL_CONSTRAINTS)
    params.set_flags()
    assert params.loading_flags == LoadingFlag.COMPLETE
    assert params.support_area == 0.75
    assert params.enable_support and params.enable_lifo and params.enable_fragility
    assert params.enable_three_dimensional_loading


def test_set_flags_no_support():
    params = LoadingProblemParams(variant=VariantType.NO_SUPPORT)
    params.set_flags()
    assert params.loading_flags == LoadingFlag.NO_SUPPORT
    assert params.support_area == 0.0
    assert not params.enable_support
    assert params.enable_lifo


def test_set_flags_no_lifo_and_no_fragility():
    no_lifo = LoadingProblemParams(variant=VariantType.NO_LIFO)
    no_lifo.set_flags()
    assert no_lifo.loading_flags == LoadingFlag.NO_LIFO
    assert not no_lifo.enable_lifo
    no_frag = LoadingProblemParams(variant=VariantType.NO_FRAGILITY)
    no_frag.set_flags()
    assert no_frag.loading_flags == LoadingFlag.NO_FRAGILITY
    assert not no_frag.enable_fragility


@pytest.mark.parametrize(
    "variant",
    [VariantType.VOLUME, VariantType.WEIGHT, VariantType.VOLUME_WEIGHT_APPROXIMATION],
)
def test_set_flags_approximations_keep_flags(variant):
    params = LoadingProblemParams(
        variant=variant,
        loading_flags=LoadingFlag.LIFO_SEQUENCE,
        enable_three_dimensional_loading=True,
        enable_lifo=True,
    )
    params.set_flags()
    assert params.loading_flags == LoadingFlag.LIFO_SEQUENCE
    assert not params.enable_three_dimensional_loading
    assert not params.enable_lifo


def test_set_flags_rejects_none():
    with pytest.raises(ValueError, match="not implemented"):
        LoadingProblemParams().set_flags()