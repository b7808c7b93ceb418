"""
Local status reconciliation after a confirmed approve/reject.
"""

from typing import List, Optional, Sequence

from hrtime.core.exceptions import EntryNotFoundError
from hrtime.schemas.timesheet import DayEntry, EntryId, TimesheetStatus


def find_entry(entries: Sequence[DayEntry], day_id: EntryId) -> Optional[DayEntry]:
    target = str(day_id)
    for entry in entries:
        if entry.id is not None and str(entry.id) == target:
            return entry
    return None


def apply_status_change(
    entries: Sequence[DayEntry],
    day_id: EntryId,
    new_status: TimesheetStatus,
    reason: Optional[str] = None,
) -> List[DayEntry]:
    """
    Return a new entry list with one entry's status replaced.

    The entry whose id matches day_id (compared as strings) gets new_status;
    its rejection reason is set to reason for REJECTED and cleared otherwise.
    Every other entry is carried over as the same object and the input
    sequence is left as it was.

    Raises:
        EntryNotFoundError: no entry has the requested id.
    """
    new_status = TimesheetStatus(new_status)
    target = str(day_id)
    updated: List[DayEntry] = []
    found = False
    for entry in entries:
        if not found and entry.id is not None and str(entry.id) == target:
            updated.append(
                entry.model_copy(
                    update={
                        "status": new_status,
                        "rejection_reason": reason if new_status == TimesheetStatus.REJECTED else None,
                    }
                )
            )
            found = True
        else:
            updated.append(entry)

    if not found:
        raise EntryNotFoundError(day_id)
    return updated
