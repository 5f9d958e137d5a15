"""Domain policies package."""

from .data_source import DataSourceSelector, is_live_record

__all__ = ["DataSourceSelector", "is_live_record"]
