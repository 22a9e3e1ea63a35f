from .category import CategoryStats

__all__ = [
    "CategoryStats",
]
