"""
Per-session timesheet board: the in-memory entry collection behind the views.
"""

from typing import Any, Dict, Iterable, List, Optional

from hrtime.core.exceptions import EntryNotFoundError, UpstreamAPIError
from hrtime.core.logging import logger
from hrtime.schemas.timesheet import DayEntry, EntryId, FilterCriteria, TimesheetStatus, WeekBucket
from hrtime.services.aggregator import aggregate, find_bucket
from hrtime.services.filters import filter_view
from hrtime.services.normalizer import normalize_records
from hrtime.services.reconciler import apply_status_change, find_entry


class TimesheetBoard:
    """
    Holds the current snapshot of day entries for one session.

    Snapshots are replaced, never edited, so a reference to an older
    snapshot stays valid for rollback.
    """

    def __init__(self, entries: Optional[List[DayEntry]] = None):
        self.entries: List[DayEntry] = list(entries or [])
        self.dropped = 0
        self.loaded = entries is not None

    def load(self, raws: Iterable[Dict[str, Any]]) -> List[DayEntry]:
        result = normalize_records(raws)
        self.entries = result.entries
        self.dropped = result.dropped
        self.loaded = True
        return self.entries

    def weeks(self, criteria: Optional[FilterCriteria] = None) -> List[WeekBucket]:
        return filter_view(aggregate(self.entries), criteria)

    def days(self, criteria: Optional[FilterCriteria] = None) -> List[DayEntry]:
        ordered = sorted(self.entries, key=lambda e: e.date)
        return filter_view(ordered, criteria)

    def week_of(self, entry: DayEntry) -> Optional[WeekBucket]:
        return find_bucket(aggregate(self.entries), entry)

    async def change_status(
        self,
        client,
        token: str,
        day_id: EntryId,
        status: TimesheetStatus,
        reason: Optional[str] = None,
    ) -> DayEntry:
        """
        Change one entry's status upstream, then patch the local snapshot.

        The patch is tried on the current snapshot first so an unknown id
        fails before anything is sent. Once the upstream call succeeds it is
        applied again to whichever snapshot is current at that point, so
        changes to other entries that finished in the meantime are kept. On
        failure the board is left as it was.

        Raises:
            EntryNotFoundError: day_id is not on the board.
            UpstreamAPIError: the upstream mutation failed.
        """
        preview = find_entry(apply_status_change(self.entries, day_id, status, reason), day_id)

        try:
            await client.change_status(token, day_id, TimesheetStatus(status).value, reason)
        except UpstreamAPIError:
            logger.error(f"Status change to {status} for entry {day_id} failed; keeping previous state")
            raise

        try:
            self.entries = apply_status_change(self.entries, day_id, status, reason)
        except EntryNotFoundError:
            # Board was reloaded while the change was in flight
            logger.warning(f"Entry {day_id} left the board before its status change was applied")
            return preview

        updated = find_entry(self.entries, day_id)
        logger.info(f"Entry {day_id} set to {updated.status.value}")
        return updated
