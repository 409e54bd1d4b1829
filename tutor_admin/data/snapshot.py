"""
Authoritative in-memory copy of the admin dataset.

The snapshot is swapped as a single object after every successful load, so a
reader holding `manager.snapshot` always sees one consistent dataset. When two
reloads overlap, whichever finishes last wins.
"""

import logging
from typing import Callable, List

from tutor_admin.api.client import ApiClient
from tutor_admin.auth.session_store import SessionStore
from tutor_admin.core.exceptions import AuthError, NetworkError
from tutor_admin.core.schemas import EMPTY_SNAPSHOT, Snapshot

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[Snapshot], None]


class SnapshotManager:
    def __init__(self, api: ApiClient, session: SessionStore) -> None:
        self.api = api
        self.session = session
        self._snapshot: Snapshot = EMPTY_SNAPSHOT
        self._listeners: List[SnapshotListener] = []
        self.loaded = False

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Call `listener(snapshot)` after every swap. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    async def reload(self, token: str) -> Snapshot:
        """
        Replace the whole snapshot with a fresh server copy.

        - AuthError: session cleared, snapshot discarded, error re-raised.
        - NetworkError: snapshot discarded (no stale dashboard), error re-raised.
        """
        try:
            fresh = await self.api.load_all(token)
        except AuthError:
            logger.info("Admin code no longer accepted; clearing session")
            self.session.clear_session()
            self.discard()
            raise
        except NetworkError:
            self.discard()
            raise

        self._swap(fresh, loaded=True)
        logger.info(
            "Snapshot loaded: %d students, %d lessons, %d payments, %d referrers",
            len(fresh.students), len(fresh.lessons), len(fresh.payments), len(fresh.referrers),
        )
        return fresh

    def discard(self) -> None:
        if self.loaded or self._snapshot is not EMPTY_SNAPSHOT:
            self._swap(EMPTY_SNAPSHOT, loaded=False)

    def _swap(self, snapshot: Snapshot, *, loaded: bool) -> None:
        self._snapshot = snapshot
        self.loaded = loaded
        for listener in list(self._listeners):
            listener(snapshot)
