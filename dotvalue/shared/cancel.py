from threading import Event
from uuid import UUID

from std2.cell import RefCell


class Token:
    """
    Flips once, never flips back
    """

    def __init__(self) -> None:
        self._ev = Event()

    def cancel(self) -> None:
        self._ev.set()

    def is_cancellation_requested(self) -> bool:
        return self._ev.is_set()


class ChangeToken:
    """
    Signalled as soon as a newer change id is published in `cell`
    """

    def __init__(self, cell: RefCell[UUID], change_id: UUID) -> None:
        self._cell, self._change_id = cell, change_id
        self._cancelled = False

    def is_cancellation_requested(self) -> bool:
        if not self._cancelled:
            self._cancelled = self._cell.val != self._change_id
        return self._cancelled
