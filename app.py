from permit_explorer.bootstrap_env import ensure_env

ensure_env()  # must run before settings are read

import logging

import pandas as pd
import streamlit as st

from permit_explorer.config import ALL_YEARS, SelectionPolicy, load_settings
from permit_explorer.data.loader import (
    inline_sources,
    load_boundaries,
    load_permits,
    url_sources,
    year_options,
)
from permit_explorer.errors import DashboardError
from permit_explorer.logging_setup import configure_logging
from permit_explorer.spec.builder import DashboardState
from permit_explorer.ui.formatting import format_number, format_year_option
from permit_explorer.ui.layout import setup_page, sidebar_controls
from permit_explorer.ui.mount import MountPoint
from permit_explorer.ui.render import SELECTIONS_KEY, render_dashboard

logger = logging.getLogger("permit_explorer.app")


def _active_filter_summary(df: pd.DataFrame, year: str, policy: SelectionPolicy) -> None:
    if year == ALL_YEARS or df.empty:
        count = len(df)
    else:
        count = int((df["ISSUE_DATE"].dt.year == int(year)).sum())
    policy_text = "kept across years" if policy is SelectionPolicy.PRESERVE else "reset on year change"
    st.markdown(f"**Active Filters: {format_year_option(year)}** | Selections {policy_text}")
    st.caption(f"Showing {format_number(count, 0)} permits before brushing.")


def main() -> None:
    setup_page()
    st.title("Chicago Building Permits Explorer")

    try:
        settings = load_settings()
        configure_logging(settings.log_level)
        permits = load_permits(settings.permits_path)
        if settings.inline_data:
            data = inline_sources(permits, load_boundaries(settings.boundaries_path))
        else:
            data = url_sources(settings)
    except (DashboardError, FileNotFoundError) as exc:
        logger.exception("Could not load dashboard settings or data")
        st.error(str(exc))
        return

    controls = sidebar_controls(year_options(permits), settings.selection_policy)
    _active_filter_summary(permits, controls.year, controls.selection_policy)

    state = DashboardState(
        year=controls.year,
        data=data,
        selection_policy=controls.selection_policy,
        initial_selections=st.session_state.get(SELECTIONS_KEY, {}),
    )
    try:
        render_dashboard(state, MountPoint(), validate=settings.validate_spec)
    except DashboardError as exc:
        logger.exception("Dashboard render failed")
        st.error(str(exc))


if __name__ == "__main__":
    main()
