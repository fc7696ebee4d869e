"""
Render orchestration: build the spec for the current state and swap it into
the mount point.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional

import streamlit as st

from permit_explorer.config import SelectionPolicy
from permit_explorer.spec.builder import DashboardState, build_dashboard_spec
from permit_explorer.spec.params import SELECTION_PARAMS
from permit_explorer.spec.validation import validate_spec
from permit_explorer.ui.mount import MountPoint

logger = logging.getLogger(__name__)

CHART_KEY = "pe_dashboard_chart"
SELECTIONS_KEY = "pe_selections"

_PARAMS_BY_NAME = {p.name: p for p in SELECTION_PARAMS}


def _interval_value(param, raw: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    # Streamlit reports intervals keyed by field; Vega-Lite initialises them by channel
    channels = {k: v for k, v in raw.items() if k in param.encodings}
    if not channels and len(param.encodings) == 1 and len(raw) == 1:
        channels = {param.encodings[0]: next(iter(raw.values()))}
    return channels or None


def _point_value(param, raw: Any) -> Optional[list]:
    if not isinstance(raw, list):
        return None
    points = []
    for item in raw:
        kept = {f: item[f] for f in param.fields if isinstance(item, dict) and f in item}
        if kept:
            points.append(kept)
    return points or None


def selection_to_initial_values(selection: Mapping[str, Any]) -> Dict[str, Any]:
    """Translate a Streamlit chart selection into Vega-Lite param ``value``s.

    Empty or unrecognised entries are dropped.
    """
    values: Dict[str, Any] = {}
    for name, raw in (selection or {}).items():
        param = _PARAMS_BY_NAME.get(name)
        if param is None or not raw:
            continue
        if param.kind == "interval" and isinstance(raw, Mapping):
            value = _interval_value(param, raw)
        else:
            value = _point_value(param, raw)
        if value:
            values[name] = value
    return values


def remember_selection() -> None:
    """on_select callback: sync session state with the chart's live selection."""
    event = st.session_state.get(CHART_KEY)
    selection = getattr(event, "selection", None)
    if selection is None and isinstance(event, Mapping):
        selection = event.get("selection")
    selection = selection or {}
    values = selection_to_initial_values(selection)
    stored = dict(st.session_state.get(SELECTIONS_KEY, {}))
    for name in selection:
        # a param reported empty was cleared in the chart
        if name in values:
            stored[name] = values[name]
        else:
            stored.pop(name, None)
    st.session_state[SELECTIONS_KEY] = stored


def render_dashboard(
    state: DashboardState,
    mount: MountPoint,
    validate: bool = False,
    on_select: Optional[Callable[[], None]] = None,
) -> Dict[str, Any]:
    """Build the spec for ``state`` and replace whatever the mount point shows.

    Selections are only reported back to Streamlit under the preserve policy.
    Returns the spec that was submitted.
    """
    logger.info(
        "Rendering dashboard year=%s policy=%s",
        state.year,
        state.selection_policy.value,
    )
    spec = build_dashboard_spec(state)
    if validate:
        validate_spec(spec)

    chart_kwargs: Dict[str, Any] = {"spec": spec, "theme": None}
    if state.selection_policy is SelectionPolicy.PRESERVE:
        chart_kwargs["key"] = CHART_KEY
        chart_kwargs["on_select"] = on_select or remember_selection

    with mount.attach() as container:
        container.vega_lite_chart(**chart_kwargs)
    logger.debug("Render #%d submitted", mount.renders)
    return spec
