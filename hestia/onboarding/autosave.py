"""
Autosave Coordinator

Debounced persistence of wizard form edits.

Timeline (quiet period = 1s):
=============================
    edit  edit  edit ........ 1s ........ ► update_draft(snapshot)
      │     │     │
      └─────┴─────┴── each edit restarts the timer

N edits inside the quiet period produce one write carrying the snapshot
taken when the timer fires.

Guards:
=======
notify_change() does nothing until BOTH hold:
- loaded:   the existing draft (if any) has been read into the form
- draft id: a draft row exists to write to

Failures are logged and kept in ``last_error``. They are never raised and
never retried; the next successful save carries the latest snapshot.
"""

import asyncio
from typing import Callable, Optional
from uuid import UUID

from hestia.config.settings import settings
from hestia.shared.core.exceptions import AutosaveFailedError
from hestia.shared.core.logging import get_logger
from hestia.shared.schemas.artisan import DraftUpdate
from hestia.shared.services.draft_profile_service import DraftProfileService

logger = get_logger(__name__)

SnapshotFn = Callable[[], DraftUpdate]


class AutosaveCoordinator:
    """
    Debounces form mutations into single draft writes.

    Example:
        autosave = AutosaveCoordinator(drafts, snapshot=lambda: form.to_update())
        autosave.mark_loaded()
        autosave.set_draft_id(draft_id)
        autosave.notify_change()   # write lands quiet_period seconds later
    """

    def __init__(
        self,
        store: DraftProfileService,
        snapshot: SnapshotFn,
        quiet_period: Optional[float] = None,
    ):
        self._store = store
        self._snapshot = snapshot
        self.quiet_period = settings.AUTOSAVE_QUIET_PERIOD_SECONDS if quiet_period is None else quiet_period

        self._loaded = False
        self._draft_id: Optional[UUID] = None
        self._timer: Optional[asyncio.TimerHandle] = None
        self._in_flight: set[asyncio.Task] = set()

        self.saves = 0
        self.last_error: Optional[AutosaveFailedError] = None

    # ═══════════════════════════════════════════════════════════════════════════
    # GUARDS
    # ═══════════════════════════════════════════════════════════════════════════

    def mark_loaded(self) -> None:
        self._loaded = True

    def set_draft_id(self, draft_id: UUID) -> None:
        self._draft_id = draft_id

    @property
    def armed(self) -> bool:
        """True once data is loaded and the draft id is known."""
        return self._loaded and self._draft_id is not None

    @property
    def pending(self) -> bool:
        """True while a write is scheduled but has not started."""
        return self._timer is not None

    # ═══════════════════════════════════════════════════════════════════════════
    # DEBOUNCE
    # ═══════════════════════════════════════════════════════════════════════════

    def notify_change(self) -> None:
        """Restart the quiet-period timer. No-op until armed."""
        if not self.armed:
            return

        if self._timer is not None:
            self._timer.cancel()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.quiet_period, self._fire)

    def cancel(self) -> None:
        """Drop the scheduled write, if any. Writes already running finish."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            logger.debug("autosave_cancelled", draft_id=str(self._draft_id))

    async def wait_idle(self) -> None:
        """Wait for every running write to finish."""
        while self._in_flight:
            await asyncio.gather(*self._in_flight, return_exceptions=True)

    def _fire(self) -> None:
        self._timer = None
        task = asyncio.get_running_loop().create_task(self._save())
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _save(self) -> None:
        draft_id = self._draft_id
        try:
            await self._store.update_draft(draft_id, self._snapshot())
        except Exception as e:
            self.last_error = AutosaveFailedError(str(draft_id), str(e))
            logger.warning("autosave_failed", draft_id=str(draft_id), error=str(e), exc_info=True)
            return

        self.saves += 1
        self.last_error = None
        logger.debug("autosave_flushed", draft_id=str(draft_id))
