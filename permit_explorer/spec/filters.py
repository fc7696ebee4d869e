"""
Filter predicates shared by every panel's transform list.
"""

from __future__ import annotations

from typing import Optional, Union

from permit_explorer.config import ALL_YEARS

ISSUE_DATE_FIELD = "datum.ISSUE_DATE"


def year_filter_expr(year: Optional[Union[str, int]]) -> str:
    """Return a Vega expression keeping only permits issued in ``year``.

    Empty values and the ``"all"`` sentinel disable the filter. Anything else
    is interpolated as-is; the Vega runtime rejects malformed years at render
    time.
    """
    if not year or year == ALL_YEARS:
        return "true"
    return f"year({ISSUE_DATE_FIELD}) == {year}"


def cost_range_expr(field: str = "COST", upper: Optional[float] = None) -> str:
    expr = f"isValid(datum.{field}) && datum.{field} > 0"
    if upper is not None:
        expr += f" && datum.{field} <= {upper:.0f}"
    return expr
