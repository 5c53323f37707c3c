"""Sunrise: wake a sleeping display when Sunshine reports it missing."""

from __future__ import annotations

__version__ = "0.1.0"
