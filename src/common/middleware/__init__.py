"""Common middleware for learngate."""

from .observability import StructlogContextMiddleware

__all__ = ["StructlogContextMiddleware"]
