"""
ui/types.py
===========
Lightweight data containers used across every UI module.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

ColorRGB = Tuple[int, int, int]


@dataclass(frozen=True)
class SignalHead:
    """Screen placement of one road's two-lamp signal."""
    road: str
    x: int
    y: int
    vertical: bool
    """True when the lamps are stacked vertically (north / south arms)."""

