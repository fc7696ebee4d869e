"""
Application-wide configuration constants and helper utilities.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from permit_explorer.errors import ConfigError

VEGA_LITE_SCHEMA_URL = "https://vega.github.io/schema/vega-lite/v5.json"

# Sentinel year value meaning "no year filter"
ALL_YEARS = "all"

REQUIRED_COLUMNS = [
    "RECORD_ID",
    "PERMIT_TYPE",
    "WORK_TYPE",
    "COMMUNITY_AREA_NAME",
    "COMMUNITY_UPPER",
    "REPORTED_COST",
    "ISSUE_DATE",
    "x",
    "y",
]

# Columns pulled from the permits table into the community boundaries
LOOKUP_FIELDS = ["ISSUE_DATE", "PERMIT_TYPE", "x", "y", "REPORTED_COST"]

MAX_REPORTED_COST = 5_000_000


class SelectionPolicy(str, Enum):
    """What happens to live brushes/clicks when the spec is rebuilt."""

    RESET = "reset"
    PRESERVE = "preserve"


@dataclass(frozen=True)
class PanelSizes:
    scatter_width: int = 700
    scatter_height: int = 520
    bar_width: int = 700
    bar_height: int = 260
    map_height: int = 400
    row_gap: int = 20

    @property
    def map_width(self) -> int:
        return self.scatter_width + self.bar_width + self.row_gap


@dataclass(frozen=True)
class Palette:
    highlight: str = "#e67e22"
    histogram: str = "#16a085"
    line: str = "#2c7fb8"
    map_scheme: str = "blues"
    map_stroke: str = "white"


@dataclass(frozen=True)
class Settings:
    permits_path: str = "data/embeddings_2d_pca_sample.csv"
    boundaries_path: str = "data/ChicagoNeighborhoods.geojson"
    permits_url: str = "embeddings_2d_pca_sample.csv"
    boundaries_url: str = "ChicagoNeighborhoods.geojson"
    inline_data: bool = True
    selection_policy: SelectionPolicy = SelectionPolicy.RESET
    validate_spec: bool = False
    log_level: str = "INFO"


DEFAULT_SIZES = PanelSizes()
DEFAULT_PALETTE = Palette()

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigError(f"{name} must be a boolean flag, got {raw!r}")


def parse_selection_policy(raw: Optional[str]) -> SelectionPolicy:
    if raw is None or not raw.strip():
        return SelectionPolicy.RESET
    try:
        return SelectionPolicy(raw.strip().lower())
    except ValueError:
        allowed = ", ".join(p.value for p in SelectionPolicy)
        raise ConfigError(f"SELECTION_POLICY must be one of {allowed}, got {raw!r}") from None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from environment variables, falling back to defaults."""
    env = os.environ if environ is None else environ
    defaults = Settings()
    return Settings(
        permits_path=env.get("PERMITS_DATA_PATH") or defaults.permits_path,
        boundaries_path=env.get("BOUNDARIES_PATH") or defaults.boundaries_path,
        permits_url=env.get("PERMITS_DATA_URL") or defaults.permits_url,
        boundaries_url=env.get("BOUNDARIES_URL") or defaults.boundaries_url,
        inline_data=_parse_bool("INLINE_DATA", env.get("INLINE_DATA"), defaults.inline_data),
        selection_policy=parse_selection_policy(env.get("SELECTION_POLICY")),
        validate_spec=_parse_bool("VALIDATE_SPEC", env.get("VALIDATE_SPEC"), defaults.validate_spec),
        log_level=(env.get("LOG_LEVEL") or defaults.log_level).upper(),
    )
