"""
Layout helpers for the Streamlit application (page config, sidebar controls).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import streamlit as st

from permit_explorer.config import ALL_YEARS, SelectionPolicy
from permit_explorer.ui.formatting import format_year_option
from permit_explorer.ui.render import SELECTIONS_KEY

YEAR_KEY = "pe_year"
POLICY_KEY = "pe_selection_policy"

POLICY_LABELS = {
    SelectionPolicy.RESET: "Reset on year change",
    SelectionPolicy.PRESERVE: "Keep across year changes",
}


@dataclass
class ControlState:
    year: str
    selection_policy: SelectionPolicy


def setup_page() -> None:
    """Set Streamlit page configuration."""
    st.set_page_config(
        page_title="Chicago Building Permits Explorer",
        layout="wide",
        page_icon=":bar_chart:",
    )


def _clear_state_keys(keys: List[str]) -> None:
    for key in keys:
        st.session_state.pop(key, None)


def sidebar_controls(year_options: List[str], default_policy: SelectionPolicy) -> ControlState:
    """
    Render the sidebar year selector and selection settings and return their values.
    """
    st.sidebar.header("Filters")
    options = year_options or [ALL_YEARS]
    year = st.sidebar.selectbox(
        "Issue Year",
        options=options,
        index=0,
        key=YEAR_KEY,
        format_func=format_year_option,
        help="Restrict every panel to permits issued in one year.",
    )

    policies = list(POLICY_LABELS)
    if POLICY_KEY not in st.session_state:
        st.session_state[POLICY_KEY] = default_policy
    policy = st.sidebar.radio(
        "Brushes & clicks",
        options=policies,
        key=POLICY_KEY,
        format_func=lambda p: POLICY_LABELS[p],
        help="Whether chart selections survive a change of year.",
    )

    if st.sidebar.button("Clear Selections", key="pe_clear_selections", type="primary"):
        _clear_state_keys([SELECTIONS_KEY])
        st.rerun()

    return ControlState(year=str(year), selection_policy=policy)
