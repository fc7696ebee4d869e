"""Pytest fixtures shared across the dashboard tests."""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest

from permit_explorer.spec.builder import DashboardState, DataSources


@pytest.fixture
def raw_permits() -> pd.DataFrame:
    """Return a small permits frame shaped like the embeddings CSV."""

    return pd.DataFrame(
        {
            "RECORD_ID": ["P1", "P2", "P3", "P4"],
            "PERMIT_TYPE": ["PERMIT - RENOVATION", "PERMIT - WRECKING", "PERMIT - RENOVATION", "PERMIT - SIGNS"],
            "WORK_TYPE": ["Interior", "Demolition", "N/A", "Sign"],
            "COMMUNITY_AREA_NAME": ["Uptown", "Austin", "Uptown", "Loop"],
            "COMMUNITY_UPPER": ["UPTOWN", "AUSTIN", "UPTOWN", "LOOP"],
            "REPORTED_COST": ["12000", "0", "4500.50", "250000"],
            "ISSUE_DATE": ["2019-03-04T00:00:00", "2020-07-15T00:00:00", "2020-01-02T00:00:00", "not a date"],
            "x": [0.1, -1.2, 0.4, 2.5],
            "y": [1.0, 0.3, -0.7, 0.0],
        }
    )


@pytest.fixture
def boundaries() -> dict:
    """Return a two-feature community FeatureCollection."""

    square = [[[-87.65, 41.96], [-87.64, 41.96], [-87.64, 41.97], [-87.65, 41.96]]]
    return {
        "type": "FeatureCollection",
        "features": [
            {"type": "Feature", "properties": {"community": "UPTOWN"}, "geometry": {"type": "Polygon", "coordinates": square}},
            {"type": "Feature", "properties": {"community": "AUSTIN"}, "geometry": {"type": "Polygon", "coordinates": square}},
        ],
    }


@pytest.fixture
def permits_csv(tmp_path: Path, raw_permits: pd.DataFrame) -> Path:
    path = tmp_path / "permits.csv"
    raw_permits.to_csv(path, index=False)
    return path


@pytest.fixture
def boundaries_file(tmp_path: Path, boundaries: dict) -> Path:
    path = tmp_path / "communities.geojson"
    path.write_text(json.dumps(boundaries), encoding="utf-8")
    return path


@pytest.fixture
def url_state() -> DashboardState:
    """Return a DashboardState that loads both tables by URL."""

    return DashboardState(
        year="all",
        data=DataSources.from_urls("permits.csv", "communities.geojson"),
    )


class FakeContainer:
    """Stands in for a Streamlit container; records vega_lite_chart calls."""

    def __init__(self) -> None:
        self.charts: list[dict] = []

    def __enter__(self) -> None:
        return None

    def __exit__(self, *exc) -> bool:
        return False

    def vega_lite_chart(self, **kwargs) -> None:
        self.charts.append(kwargs)


class FakeSlot:
    """Stands in for ``st.empty()``: holds at most one container at a time."""

    def __init__(self) -> None:
        self.children: list[FakeContainer] = []
        self.cleared = 0

    def empty(self) -> None:
        self.children.clear()
        self.cleared += 1

    def container(self) -> FakeContainer:
        child = FakeContainer()
        self.children.append(child)
        return child


@pytest.fixture
def fake_slot() -> FakeSlot:
    return FakeSlot()
