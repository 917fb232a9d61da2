# cargoroute

Building blocks for the capacitated vehicle routing problem with
three-dimensional loading constraints (3L-CVRP): loading-constraint flags
and problem variants, the geometry of items and containers, a routing
instance with Euclidean distances, a cache of loading-check results, a route
loading checker, a feature-based pre-filter for routes, and writers for the
solution-validator text format.

The package has no third-party dependencies.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `cargoroute.flags`: the enums `LoadingStatus`, `PackingType`,
  `LoadingFlag` (a bit mask, tested with `is_set(mask, flag)`) and
  `VariantType`; the dataclasses `CPSolverParams`, `ClassifierParams`,
  `LoadingProblemParams` and `ContainerLoadingParams`.
  `LoadingProblemParams.set_flags()` derives the support, LIFO and fragility
  switches, the support area and the loading flags from the variant;
  `variant_string()` returns the variant's name. Both raise `ValueError` for
  `VariantType.NONE`.
- `cargoroute.geometry`: `Cuboid` (an item), `Container` and `Group` (the
  items of one location), the enums `Axis`, `Orientation`, `Rotation` and
  `Fragility`, `homogeneity_key` for grouping items of identical type, and
  JSON conversion with `cuboid_to_json` / `cuboid_from_json` and
  `container_to_json` / `container_from_json`.
- `cargoroute.instance`: `Node`, `Arc`, `Route`, `Vehicle` and `Instance`,
  which builds the Euclidean distance matrix over its nodes
  (`distance(tail, head)`, `customers()`, `depot_id()`).
- `cargoroute.feasibility_cache`: `FeasibilityCache`, which remembers
  feasible, infeasible and unknown outcomes per loading mask, by ordered
  sequence of stops when the sequence flag is set and by customer set
  otherwise. Customer sets are integer bit masks made with `make_bitset`.
- `cargoroute.loading_checker`: `LoadingChecker`, which selects a route's
  items, consults the cache, optionally a classifier, and otherwise a packing
  solver you supply; it also gives a lower bound on the number of vehicles
  from weight and volume (`determine_min_vehicles`) and keeps track of
  infeasible customer combinations.
- `cargoroute.classifier`: `extract_features` (46 features describing a
  route's items relative to a container), `mean`, `std`,
  `load_standard_scaling` for a JSON file with `mean` and `std` lists, and
  `Classifier`, which scales the features, passes them to a model callable
  and compares its output with the acceptance threshold. Scaled features can
  be saved to time-stamped CSV files.
- `cargoroute.validator_io`: `write_input` and `write_output` write
  `Instance_<name>.txt` and `Solution_<name>.txt` into a
  `SolutionValidator/` folder below the given path.

## Examples

```python
from cargoroute.flags import LoadingProblemParams, VariantType, LoadingFlag, is_set

params = LoadingProblemParams(variant=VariantType.NO_LIFO)
params.set_flags()
assert is_set(params.loading_flags, LoadingFlag.SUPPORT)
assert not is_set(params.loading_flags, LoadingFlag.LIFO)
print(params.variant_string())  # NoLifo
```

```python
from cargoroute.geometry import Cuboid, Axis

box = Cuboid(dx=40, dy=20, dz=10)
assert box.minimum_rotatable_dimension(Axis.X) == 20
```

A loading check with a simple volume-based solver:

```python
from cargoroute.feasibility_cache import make_bitset
from cargoroute.flags import ContainerLoadingParams, LoadingStatus, VariantType
from cargoroute.geometry import Container, Cuboid, Group
from cargoroute.loading_checker import LoadingChecker


def volume_only(params, container, items, number_stops, mask, support_area, max_runtime):
    total = sum(item.volume for item in items)
    return LoadingStatus.FEAS_OPT if total <= container.volume else LoadingStatus.INFEASIBLE


params = ContainerLoadingParams()
params.loading_problem.variant = VariantType.ALL_CONSTRAINTS
params.loading_problem.set_flags()
checker = LoadingChecker(params, max_runtime=10.0, solver=volume_only)

nodes = [
    Group(intern_id=0),
    Group(intern_id=1, items=[Cuboid(dx=10, dy=10, dz=10)]),
    Group(intern_id=2, items=[Cuboid(dx=20, dy=10, dz=10)]),
]
route = [1, 2]
items = checker.select_items(route, nodes, reversed_direction=False)
container = Container(dx=30, dy=10, dz=10, weight_limit=100.0)

assert checker.complete_check(container, make_bitset(len(nodes), route), route, items)
assert checker.feasible_routes() == [[1, 2]]
```

## What the package does not do

- It contains no three-dimensional packing solver. `LoadingChecker` calls
  the solver you pass in and caches what it returns.
- It contains no bin-packing model; a vehicle lower bound with lifting
  needs a `bin_packing` callable.
- `Classifier` does not load a trained model from disk; it takes any
  callable that maps the scaled features to a probability.
- It has no routing heuristic, no local search and no command-line program.