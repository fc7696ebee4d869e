"""
Exception types raised by the dashboard.
"""

from __future__ import annotations

from typing import Iterable


class DashboardError(Exception):
    """Base class for errors the app reports to the user."""


class ConfigError(DashboardError):
    pass


class DataContractError(DashboardError):
    """Input file does not match the expected columns or layout."""


class SpecError(DashboardError):
    pass


class UndeclaredParamError(SpecError):
    def __init__(self, missing: Iterable[str]):
        self.missing = sorted(set(missing))
        super().__init__(
            "Selection params referenced but never declared: " + ", ".join(self.missing)
        )


class DuplicateParamError(SpecError):
    def __init__(self, duplicates: Iterable[str]):
        self.duplicates = sorted(set(duplicates))
        super().__init__(
            "Selection params declared by more than one panel: " + ", ".join(self.duplicates)
        )


class SpecValidationError(SpecError):
    """Assembled spec does not conform to the Vega-Lite schema."""
