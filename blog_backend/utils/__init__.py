"""Small, reusable helpers shared by middleware and controllers."""

__all__ = ["dates", "http"]
