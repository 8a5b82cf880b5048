"""Exception types raised by the emission calculators and the batch runner."""

from __future__ import annotations


class ValidationError(ValueError):
    """An activity quantity, category or option is outside its allowed range."""


class AggregationError(ValueError):
    """Source results cannot be combined into a farm total."""


class BoundaryConfigError(ValueError):
    """Unknown boundary scope or source tag."""
