"""Shared formatting helpers for variation reports."""

from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path


def ensure_directory(path: str | Path) -> Path:
    """Create the directory at ``path`` if needed and return its Path."""
    directory = Path(path)
    if not directory.exists():
        directory.mkdir(parents=True, exist_ok=True)
    return directory


def format_variation(value: float) -> str:
    """Format a percentage variation with an explicit sign, e.g. ``+5.00%``."""
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.2f}%"


def format_clp(amount: float) -> str:
    """Format an amount as Chilean pesos: no decimals, dot thousands separator."""
    rounded = int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,}".replace(",", ".")
