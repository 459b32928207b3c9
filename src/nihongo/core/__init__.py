"""Core logic independent of HTTP.

Modules:
- errors: error taxonomy (Unauthorized, NotFound, InvalidArgument, StorageError)
- scoring: quiz and reading submission scoring
"""

__all__ = [
    "errors",
    "scoring",
]
