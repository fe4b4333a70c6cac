from __future__ import annotations

from .corpus import generate_broken_documents

__all__ = ["generate_broken_documents"]
