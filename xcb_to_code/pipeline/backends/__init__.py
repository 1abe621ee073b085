"""
Backends module.

Emission context, the per-category emitter interface, the dispatcher
that fixes category order, and the Go backend.
"""

from __future__ import annotations

from .base import EmissionContext, EmissionDispatcher, Emitter
from .go_backend import GoBackend

__all__ = ["EmissionContext", "EmissionDispatcher", "Emitter", "GoBackend"]
