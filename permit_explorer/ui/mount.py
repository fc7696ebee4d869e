"""
The single on-page slot the dashboard renders into.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Optional

import streamlit as st


class MountPoint:
    """Wraps an ``st.empty()`` slot so each render fully replaces the last one.

    ``attach()`` clears whatever the slot holds before yielding a fresh
    container, so repeated renders never stack charts or duplicate selection
    params in the Vega runtime.
    """

    def __init__(self, slot: Optional[Any] = None):
        self._slot = slot if slot is not None else st.empty()
        self.renders = 0

    def clear(self) -> None:
        self._slot.empty()

    @contextmanager
    def attach(self) -> Iterator[Any]:
        self.clear()
        container = self._slot.container()
        with container:
            yield container
        self.renders += 1
