"""Combine per-source results into a farm total."""

from __future__ import annotations

import math
from typing import Any, Mapping

from .constants import CO2EQ_UNIT
from .exceptions import AggregationError
from .results import SourceResult, TotalResult

# checked in order; the first key present wins, even if its value is None
TOTAL_KEYS = ("co2eq_kg", "total_co2eq_kg", "total_co2eq")


def _as_mapping(result: Any, position: int) -> Mapping[str, Any]:
    if isinstance(result, (SourceResult, TotalResult)):
        return result.as_dict()
    if isinstance(result, Mapping):
        return result
    raise TypeError(
        f"Result #{position} must be a SourceResult or a mapping, got {type(result).__name__}"
    )


def resolve_total(result: Mapping[str, Any], source: str) -> float:
    """Return the numeric total of one result; ``None`` counts as zero."""
    for key in TOTAL_KEYS:
        if key not in result:
            continue
        value = result[key]
        if value is None:
            return 0.0
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise AggregationError(f"Source '{source}' has a non-numeric {key}: {value!r}") from None
        if not math.isfinite(number):
            raise AggregationError(f"Source '{source}' has a non-finite {key}: {value!r}")
        return number
    raise AggregationError(
        f"Source '{source}' has none of the total fields {', '.join(TOTAL_KEYS)}"
    )


def calc_total_emissions(*results: SourceResult | Mapping[str, Any]) -> TotalResult:
    """Sum source results into a :class:`TotalResult`.

    Results may be :class:`SourceResult` objects or plain mappings carrying
    ``source`` and one of ``co2eq_kg``/``total_co2eq_kg``/``total_co2eq``.
    A single list or tuple argument is unpacked. Results sharing a source
    name are summed into one breakdown entry.
    """
    if len(results) == 1 and isinstance(results[0], (list, tuple)):
        results = tuple(results[0])
    if not results:
        raise AggregationError("no sources supplied")

    breakdown: dict[str, float] = {}
    for position, result in enumerate(results, start=1):
        mapping = _as_mapping(result, position)
        source = str(mapping.get("source") or f"source_{position}")
        breakdown[source] = breakdown.get(source, 0.0) + resolve_total(mapping, source)

    by_source = [(source, value, CO2EQ_UNIT) for source, value in breakdown.items()]
    return TotalResult(
        total_co2eq=sum(breakdown.values()),
        breakdown=breakdown,
        by_source=by_source,
        n_sources=len(results),
    )
