import json
import logging
import os
from typing import Any, Dict, List, Set

import pandas as pd
import streamlit as st

from permit_explorer.config import ALL_YEARS, REQUIRED_COLUMNS, Settings
from permit_explorer.errors import DataContractError
from permit_explorer.spec.builder import BOUNDARIES_FORMAT, DataSources

logger = logging.getLogger(__name__)

SENTINELS: Set[str] = {"", "None", "none", "N/A", "n/a", "NA", "na", "null", "Null", "-", "—"}

PERMITS_DATASET = "permits"


def _normalize_sentinels(df: pd.DataFrame) -> pd.DataFrame:
    """Replace sentinel string tokens with None (in-place) and record counts in df.attrs.

    Adds / updates:
        df.attrs['sentinel_replacements'] = {column: count_replaced, ...}
    """
    replacements = {}
    for col in df.columns:
        if df[col].dtype == object or pd.api.types.is_string_dtype(df[col]):
            mask = df[col].apply(lambda v: isinstance(v, str) and v.strip() in SENTINELS)
            count = int(mask.sum())
            if count:
                replacements[col] = count
                df.loc[mask, col] = None
    if replacements:
        df.attrs["sentinel_replacements"] = replacements
    return df


def check_columns(df: pd.DataFrame, required: List[str] = REQUIRED_COLUMNS) -> None:
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise DataContractError(f"Permits file is missing required columns: {missing}")


def prepare_permits(raw: pd.DataFrame) -> pd.DataFrame:
    """Validate and normalise a raw permits frame.

    REPORTED_COST stays a string column; the histogram converts it itself.
    """
    check_columns(raw)
    df = _normalize_sentinels(raw.copy())
    df["ISSUE_DATE"] = pd.to_datetime(df["ISSUE_DATE"], errors="coerce")
    for col in ("x", "y"):
        df[col] = pd.to_numeric(df[col], errors="coerce")

    df.attrs["diagnostics"] = {
        "row_count": int(len(df)),
        "issue_date_non_null": int(df["ISSUE_DATE"].notna().sum()),
        "sentinel_replacements": df.attrs.get("sentinel_replacements", {}),
    }
    return df


def load_permits(path: str) -> pd.DataFrame:
    """Wrapper that checks the path and calls the cached implementation."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Permits file not found: {path}")
    return _load_permits_impl(path)


@st.cache_data(show_spinner=False)
def _load_permits_impl(path: str) -> pd.DataFrame:
    raw = pd.read_csv(path, dtype={"REPORTED_COST": str, "RECORD_ID": str})
    df = prepare_permits(raw)
    logger.info("Loaded %d permits from %s", len(df), path)
    return df


def check_boundaries(geo: Dict[str, Any]) -> None:
    features = geo.get("features") if isinstance(geo, dict) else None
    if not isinstance(features, list):
        raise DataContractError("Boundary file must be a FeatureCollection with a 'features' list")
    for idx, feature in enumerate(features):
        props = feature.get("properties") or {}
        if "community" not in props:
            raise DataContractError(f"Boundary feature {idx} has no properties.community")


def load_boundaries(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Boundary file not found: {path}")
    return _load_boundaries_impl(path)


@st.cache_data(show_spinner=False)
def _load_boundaries_impl(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        geo = json.load(f)
    check_boundaries(geo)
    logger.info("Loaded %d community boundaries from %s", len(geo["features"]), path)
    return geo


def year_options(df: pd.DataFrame) -> List[str]:
    """The "all" sentinel followed by every issue year, newest first."""
    if df.empty or "ISSUE_DATE" not in df:
        return [ALL_YEARS]
    years = df["ISSUE_DATE"].dropna().dt.year.astype(int).unique().tolist()
    return [ALL_YEARS] + [str(y) for y in sorted(years, reverse=True)]


def permits_to_values(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """JSON-safe records for inline Vega-Lite data (timestamps as ISO strings)."""
    out = df.copy()
    out["ISSUE_DATE"] = out["ISSUE_DATE"].map(lambda ts: ts.isoformat() if pd.notna(ts) else None)
    out = out.astype(object).where(out.notna(), None)
    return out.to_dict(orient="records")


def inline_sources(df: pd.DataFrame, geo: Dict[str, Any]) -> DataSources:
    """Embed both tables in the spec; permits as a named dataset shared by the lookup."""
    return DataSources(
        permits={"name": PERMITS_DATASET},
        boundaries={"values": geo, "format": dict(BOUNDARIES_FORMAT)},
        datasets={PERMITS_DATASET: permits_to_values(df)},
    )


def url_sources(settings: Settings) -> DataSources:
    return DataSources.from_urls(settings.permits_url, settings.boundaries_url)
