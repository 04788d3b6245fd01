"""Scaling, rounding and grouping rules applied to raw algorithm output.

Size maps use linear scaling into ``[MIN_SCALE, MAX_SCALE]``; colour maps
use ratio-to-max into ``[0, 1]``. Rounding goes through a formatted
string so the reported value is exactly what a fixed-point print shows.
"""

import math
from typing import Dict, Hashable, List, Mapping, Optional, Sequence

MIN_SCALE = 5.0
MAX_SCALE = 30.0


def _is_nan(value: Optional[float]) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def scale_size(
    value: Optional[float],
    maximum: Optional[float],
    min_scale: float = MIN_SCALE,
    max_scale: float = MAX_SCALE,
) -> float:
    """Map ``value`` linearly onto ``[min_scale, max_scale]``.

    Args:
        value: Raw metric; NaN/None counts as 0.
        maximum: Largest metric of the result set. Non-positive or NaN
            maximum maps every value to ``min_scale``.

    Returns:
        Circle size, clamped into ``[min_scale, max_scale]``.
    """
    if _is_nan(maximum) or maximum <= 0:
        return min_scale
    if _is_nan(value):
        value = 0.0
    size = min_scale + (max_scale - min_scale) * (value / maximum)
    return min(max(size, min_scale), max_scale)


def nan_max(values: Sequence[Optional[float]]) -> float:
    """Maximum ignoring NaN/None; NaN when nothing is left."""
    finite = [v for v in values if not _is_nan(v)]
    return max(finite) if finite else math.nan


def size_map(
    values: Mapping[int, Optional[float]],
    min_scale: float = MIN_SCALE,
    max_scale: float = MAX_SCALE,
) -> Dict[int, float]:
    """Scale every value against the maximum of the mapping."""
    maximum = nan_max(list(values.values()))
    return {
        key: scale_size(value, maximum, min_scale, max_scale)
        for key, value in values.items()
    }


def ratio_to_max(values: Mapping[Hashable, Optional[float]]) -> Dict[Hashable, float]:
    """Divide every value by the maximum value.

    NaN is ignored when taking the maximum and maps to 0. When the
    maximum is not positive every key maps to 0.
    """
    maximum = nan_max(list(values.values()))
    result: Dict[Hashable, float] = {}
    for key, value in values.items():
        if _is_nan(maximum) or maximum <= 0 or _is_nan(value):
            result[key] = 0.0
        else:
            result[key] = min(max(value / maximum, 0.0), 1.0)
    return result


def round_to(value: float, digits: int) -> float:
    """Round by formatting with ``digits`` decimals and parsing back."""
    return float(f"{value:.{digits}f}")


def report(value: Optional[float], digits: int) -> Optional[float]:
    """Rounded value for a result payload; NaN and None become None."""
    if _is_nan(value):
        return None
    return round_to(value, digits)


def group_members(
    membership: Sequence[int], names: Sequence[str]
) -> Dict[int, List[str]]:
    """Group display names by membership ID, ascending by group ID.

    Members keep vertex-ID order inside each group.
    """
    groups: Dict[int, List[str]] = {}
    for vertex, group in enumerate(membership):
        groups.setdefault(int(group), []).append(names[vertex])
    return {group: groups[group] for group in sorted(groups)}


def edge_key(source: int, target: int) -> str:
    """Colour-map key of an edge: ``"<from>-<to>"``."""
    return f"{source}-{target}"
