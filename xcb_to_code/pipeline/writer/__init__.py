"""
Writer module.

Validated, atomic writes of generated files.
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter

__all__ = ["AtomicWriter"]
