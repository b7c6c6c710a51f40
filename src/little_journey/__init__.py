"""Little Journey: curation of a baby's journal into books, reels and milestone suggestions."""

__version__ = "0.1.0"
