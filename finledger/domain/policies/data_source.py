"""Read-time policy deciding whether demo or live records are visible.

Demo records carry no external aggregator id; live records carry one. Both
subsets stay in storage; the selector only filters what reads return.
"""

from collections.abc import Iterable
from typing import TypeVar


RecordT = TypeVar("RecordT")


def is_live_record(record) -> bool:
    """Return True when the record came from the aggregator."""
    return getattr(record, "external_id", None) is not None


class DataSourceSelector:
    """Mutable demo/live switch shared by every ledger read path."""

    def __init__(self, demo_mode: bool = True) -> None:
        """Initialize the selector.

        Args:
            demo_mode: True to expose demo records, False for live records.
        """
        self._demo_mode = demo_mode

    @property
    def demo_mode(self) -> bool:
        return self._demo_mode

    def set_demo_mode(self, enabled: bool) -> None:
        """Switch the visible subset; no record is created or deleted."""
        self._demo_mode = enabled

    def use_demo_data(self) -> None:
        self.set_demo_mode(True)

    def use_live_data(self) -> None:
        self.set_demo_mode(False)

    def wants_live(self, live_available: bool) -> bool | None:
        """Return which subset reads should keep.

        Args:
            live_available: Whether the collection holds any live record.

        Returns:
            bool | None: False for demo records only, True for live records
            only, None for every record.
        """
        if self._demo_mode:
            return False
        return True if live_available else None

    def filter_records(
        self,
        records: Iterable[RecordT],
        live_available: bool | None = None,
    ) -> list[RecordT]:
        """Return the records visible under the current mode.

        In demo mode only demo records are returned. In live mode only live
        records are returned, unless no live record exists, in which case the
        input is returned unfiltered.

        Args:
            records: Candidate records with an ``external_id`` attribute.
            live_available: Whether the collection holds any live record.
                Computed from ``records`` when omitted.

        Returns:
            list: Visible records, in input order.
        """
        candidates = list(records)
        if live_available is None:
            live_available = any(is_live_record(record) for record in candidates)
        wanted = self.wants_live(live_available)
        if wanted is None:
            return candidates
        return [
            record for record in candidates if is_live_record(record) is wanted
        ]


__all__ = ["DataSourceSelector", "is_live_record"]
