"""Invocation analyzer -- derives facts from recorded build-execution traces."""

from __future__ import annotations

__version__ = "0.1.0"
