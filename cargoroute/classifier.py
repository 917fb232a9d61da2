"""Learned pre-filter that predicts whether a route's items can be loaded."""

from __future__ import annotations

import json
import sys
from collections.abc import Callable, Sequence
from datetime import datetime
from pathlib import Path

from cargoroute.flags import ClassifierParams
from cargoroute.geometry import Container, Cuboid, Fragility

FEATURE_COUNT = 46

Model = Callable[[list[float]], float]


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean; 0.0 for an empty sequence."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def std(values: Sequence[float]) -> float:
    """Population standard deviation; 0.0 for fewer than two values."""
    if len(values) <= 1:
        return 0.0
    centre = mean(values)
    variance = sum((value - centre) ** 2 for value in values)
    return (variance / len(values)) ** 0.5


def load_standard_scaling(path: str | Path) -> tuple[list[float], list[float]]:
    """Read the per-feature ``mean`` and ``std`` lists from a JSON file."""
    try:
        with open(path, encoding="utf-8") as handle:
            data = json.load(handle)
    except OSError as error:
        raise OSError("Could not open scaling JSON file.") from error
    return [float(v) for v in data["mean"]], [float(v) for v in data["std"]]


def _summary(values: Sequence[float]) -> list[float]:
    return [min(values), max(values), mean(values), std(values)]


def extract_features(
    items: Sequence[Cuboid], route: Sequence[int], container: Container
) -> list[float]:
    """Return the 46 features describing a route's items relative to a container."""
    if not items:
        raise ValueError("Cannot extract features from an empty item list.")

    weight_limit = container.weight_limit
    container_volume = container.volume
    container_area = container.area
    pyramid = list(range(1, len(route) + 1))

    tot_volume = tot_weight = fragile_count = 0.0
    tot_length = tot_width = tot_height = 0.0
    volume_distribution = weight_distribution = 0.0

    ratios: dict[str, list[float]] = {
        name: []
        for name in (
            "width_height",
            "length_height",
            "width_length",
            "width_W",
            "length_L",
            "height_H",
            "volume_WLH",
            "height_area",
            "area_AREA",
        )
    }

    for item in items:
        tot_volume += item.volume
        tot_weight += item.weight
        tot_width += item.dy
        tot_length += item.dx
        tot_height += item.dz
        if item.fragility == Fragility.FRAGILE:
            fragile_count += 1
        level = pyramid[item.group_id]
        volume_distribution += item.volume * level
        weight_distribution += item.weight * level

        ratios["width_height"].append(item.dy / item.dz)
        ratios["length_height"].append(item.dx / item.dz)
        ratios["width_length"].append(item.dy / item.dx)
        ratios["length_L"].append(item.dx / container.dx)
        ratios["width_W"].append(item.dy / container.dy)
        ratios["height_H"].append(item.dz / container.dz)
        ratios["volume_WLH"].append(item.volume / container_volume)
        ratios["height_area"].append(item.dz / item.area)
        ratios["area_AREA"].append(item.area / container_area)

    features = [
        float(len(items)),
        float(len(route)),
        tot_volume / container_volume,
        tot_weight / weight_limit,
        weight_distribution / weight_limit,
        volume_distribution / container_volume,
        fragile_count / len(items),
        tot_length / container.dx,
        tot_width / container.dy,
        tot_height / container.dz,
    ]
    for values in ratios.values():
        features.extend(_summary(values))
    return features


def _timestamp() -> str:
    now = datetime.now()
    return f"{now:%Y-%m-%d_%H-%M-%S}-{now.microsecond // 1000:03d}"


class Classifier:
    """Scales route features and asks a model whether loading looks feasible."""

    def __init__(self, params: ClassifierParams, model: Model) -> None:
        self.params = params
        self._model = model
        self.scaling_mean, self.scaling_std = load_standard_scaling(
            params.serialize_json_mean_std
        )

    def apply_standard_scaling(self, features: Sequence[float]) -> list[float]:
        """Standardise each feature with the stored mean and deviation."""
        if len(features) != len(self.scaling_mean) or len(features) != len(
            self.scaling_std
        ):
            raise ValueError("Feature count does not match the scaling parameters.")
        return [
            (value - centre) / spread
            for value, centre, spread in zip(
                features, self.scaling_mean, self.scaling_std
            )
        ]

    def classify(
        self,
        items: Sequence[Cuboid],
        route: Sequence[int],
        container: Container,
        status: int | None = None,
    ) -> bool:
        """Return True when the model's probability exceeds the threshold.

        When ``status`` is given and saving is enabled, the scaled features are
        written to a time-stamped CSV file together with the status and output.
        """
        scaled = self.apply_standard_scaling(extract_features(items, route, container))
        output = float(self._model(scaled))
        if status is not None and self.params.save_tensor_data:
            self._save_features(scaled, status, output)
        return output > self.params.acceptance_threshold

    def _save_features(self, features: Sequence[float], status: int, output: float) -> None:
        filename = f"{self.params.tensor_data_file_path}/tensor_{_timestamp()}.csv"
        row = [str(status), f"{output:g}", *(f"{value:g}" for value in features)]
        try:
            with open(filename, "w", encoding="utf-8") as handle:
                handle.write(",".join(row) + "\n")
        except OSError:
            print(f"Failed to open file: {filename}", file=sys.stderr)