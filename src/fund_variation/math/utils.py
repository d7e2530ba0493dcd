"""Common helper functions for the variation and statistics routines."""

from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import TypeAlias, cast

import numpy as np
import numpy.typing as npt

FloatArray: TypeAlias = npt.NDArray[np.float64]


def to_numpy(values: Iterable[float]) -> FloatArray:
    """Coerce the input sequence into a 1D NumPy float array."""
    if isinstance(values, np.ndarray):
        return cast(FloatArray, values.astype(float, copy=False))
    return cast(FloatArray, np.asarray(list(values), dtype=float))


def percent_change(start: float, end: float, *, digits: int = 2) -> float:
    """Return ``(end - start) / start`` as a percentage rounded to ``digits``."""
    if start == 0:
        raise ValueError("start must be non-zero to compute a percent change.")
    # Adding 0.0 folds a rounded -0.0 into 0.0.
    return round(((end - start) / start) * 100, digits) + 0.0


def variation_of(item: object) -> float:
    """Read the ``variation`` of a model, mapping, or attribute holder (missing -> 0)."""
    if isinstance(item, Mapping):
        value = item.get("variation")
    else:
        value = getattr(item, "variation", None)
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def parse_iso_datetime(value: str) -> datetime | None:
    """Parse an ISO date or date-time into a naive UTC datetime, or return None."""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
