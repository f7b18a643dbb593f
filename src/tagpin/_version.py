"""Package version."""

__version__ = "2.5.0"
__publish_date__ = "2024-09-01"
