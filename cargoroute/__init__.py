"""Loading constraints, item geometry, routing instances, loading checks and validator files for 3L-CVRP."""

__version__ = "0.9.0"

__all__ = [
    "classifier",
    "feasibility_cache",
    "flags",
    "geometry",
    "instance",
    "loading_checker",
    "validator_io",
]