"""Domain entities for internal representation.

These are pure frozen dataclasses passed between services. Stored documents
and API contracts live in ``feedstack.models`` and ``feedstack.dto``.
"""

from .cached_result import CachedResult

__all__ = ["CachedResult"]
