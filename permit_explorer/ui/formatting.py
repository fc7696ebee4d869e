"""
Utility helpers for formatting counts and the year selector labels.
"""

from __future__ import annotations

from typing import Optional

from permit_explorer.config import ALL_YEARS


def format_number(value: Optional[float], decimals: int = 0) -> str:
    if value is None:
        return "–"
    try:
        return f"{value:,.{decimals}f}"
    except (TypeError, ValueError):
        return "–"


def format_year_option(value: str) -> str:
    return "All years" if value == ALL_YEARS else value
