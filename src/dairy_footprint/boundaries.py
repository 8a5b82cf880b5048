from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .constants import BOUNDARY_SCOPES, SOURCE_TAGS
from .exceptions import BoundaryConfigError


@dataclass(frozen=True)
class BoundaryScope:
    """Named set of emission sources counted in a footprint."""

    scope: str
    include: frozenset[str]

    def includes(self, source: str) -> bool:
        return source in self.include

    def describe(self) -> str:
        ordered = [tag for tag in SOURCE_TAGS if tag in self.include]
        return f"{self.scope} ({', '.join(ordered)})"

    def as_dict(self) -> dict[str, object]:
        return {
            "scope": self.scope,
            "include": [tag for tag in SOURCE_TAGS if tag in self.include],
        }


def set_system_boundaries(
    scope: str = "farm_gate",
    include: Iterable[str] | None = None,
) -> BoundaryScope:
    """Build a :class:`BoundaryScope`.

    ``farm_gate`` covers the five on-farm sources, ``cradle_to_farm_gate`` adds
    upstream ``feed`` and ``partial`` requires an explicit ``include`` list.
    An explicit ``include`` replaces the scope default.
    """
    if scope not in BOUNDARY_SCOPES:
        raise BoundaryConfigError(
            f"Unknown boundary scope '{scope}'. Use one of: {', '.join(BOUNDARY_SCOPES)}"
        )

    if include is None:
        if scope == "partial":
            raise BoundaryConfigError("Scope 'partial' requires a non-empty include list")
        return BoundaryScope(scope=scope, include=frozenset(BOUNDARY_SCOPES[scope]))

    if isinstance(include, str):
        include = [include]
    tags = [str(tag).strip() for tag in include]
    if not tags:
        raise BoundaryConfigError("include must name at least one source")
    unknown = sorted({tag for tag in tags if tag not in SOURCE_TAGS})
    if unknown:
        raise BoundaryConfigError(
            f"Unrecognised source tag(s) {unknown}. Allowed: {', '.join(SOURCE_TAGS)}"
        )
    return BoundaryScope(scope=scope, include=frozenset(tags))


def is_excluded(boundaries: BoundaryScope | None, source: str) -> bool:
    return boundaries is not None and not boundaries.includes(source)
