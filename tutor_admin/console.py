"""
Admin console state.

AdminConsole is the one object a front end talks to. It owns the admin code,
the snapshot, the active screen and the dashboard's search/filter state, and
hands out view models and add-entity workflows built on top of them.
"""

import logging
from typing import Optional

from tutor_admin.api.client import ApiClient
from tutor_admin.auth.session_store import SessionStore
from tutor_admin.core.enums import ALL_SCHOOLS, MutationAction, Screen
from tutor_admin.core.exceptions import AuthError, NetworkError, ServiceError
from tutor_admin.core.schemas import Snapshot
from tutor_admin.data.snapshot import SnapshotManager
from tutor_admin.navigation.navigator import Navigator
from tutor_admin.views.schemas import LeaderboardView, StatsView, StudentDetailView, StudentListView, UiState
from tutor_admin.views.service import (
    compute_leaderboard,
    compute_stats,
    compute_student_detail,
    compute_student_list,
)
from tutor_admin.workflows.service import Workflow, start_workflow

logger = logging.getLogger(__name__)

INVALID_CODE_MESSAGE = "Invalid admin code"
LOGIN_CONNECTION_MESSAGE = "Connection error. Try again."
SESSION_EXPIRED_MESSAGE = "Session expired. Please log in again."
LOAD_CONNECTION_MESSAGE = "Connection error."


class AdminConsole:
    def __init__(
        self,
        api: ApiClient,
        session: SessionStore,
        navigator: Optional[Navigator] = None,
        snapshots: Optional[SnapshotManager] = None,
    ) -> None:
        self.api = api
        self.session = session
        self.navigator = navigator or Navigator()
        self.snapshots = snapshots or SnapshotManager(api, session)
        self.ui = UiState()
        self.admin_code = ""
        self.logging_in = False

    @property
    def snapshot(self) -> Snapshot:
        return self.snapshots.snapshot

    @property
    def screen(self) -> Screen:
        return self.navigator.screen

    # --- Session ---
    async def boot(self) -> None:
        """Resume a saved session if the server still accepts it."""
        saved = self.session.load_session()
        if not saved:
            self.navigator.to_login()
            return

        self.admin_code = saved
        try:
            await self.api.verify(saved)
        except AuthError:
            self._forget_code()
            self.navigator.to_login()
            return
        except NetworkError:
            # Offline at start-up: show the login screen without an error.
            self.navigator.to_login()
            return
        await self.reload()

    async def login(self, code: str) -> bool:
        code = (code or "").strip()
        if not code or self.logging_in:
            return False

        self.logging_in = True
        self.admin_code = code
        self.session.save_session(code)
        try:
            await self.api.verify(code)
        except AuthError:
            self._forget_code()
            self.navigator.to_login(INVALID_CODE_MESSAGE)
            return False
        except NetworkError:
            self.navigator.to_login(LOGIN_CONNECTION_MESSAGE)
            return False
        finally:
            self.logging_in = False
        return await self.reload()

    def logout(self) -> None:
        self._forget_code()
        self.snapshots.discard()
        self.navigator.to_login()
        logger.info("Logged out")

    async def reload(self) -> bool:
        """Fetch the whole dataset again and land on the dashboard."""
        try:
            await self.snapshots.reload(self.admin_code)
        except AuthError:
            self.admin_code = ""
            self.navigator.to_login(SESSION_EXPIRED_MESSAGE)
            return False
        except NetworkError:
            self.navigator.to_login(LOAD_CONNECTION_MESSAGE)
            return False
        self.navigator.show_dashboard()
        return True

    def _forget_code(self) -> None:
        self.session.clear_session()
        self.admin_code = ""

    # --- Dashboard state ---
    def set_search(self, query: str) -> StudentListView:
        self.ui = self.ui.model_copy(update={"search_query": (query or "").strip()})
        return self.student_list()

    def set_school_filter(self, school: str) -> StudentListView:
        self.ui = self.ui.model_copy(update={"school_filter": school or ALL_SCHOOLS})
        return self.student_list()

    def open_student(self, code: str) -> Optional[StudentDetailView]:
        """Drill into one student. Unknown codes leave the dashboard as it is."""
        view = compute_student_detail(self.snapshot, code)
        if view is None:
            logger.debug("No student %s in the current snapshot", code)
            return None
        self.navigator.open_detail(code)
        return view

    def back(self) -> None:
        self.navigator.back()

    def start_workflow(self, action: MutationAction, preselected_code: Optional[str] = None) -> Workflow:
        if not self.admin_code or not self.snapshots.loaded:
            raise ServiceError("Log in before adding records")
        return start_workflow(
            action,
            self.api,
            self.snapshot,
            self.admin_code,
            on_closed=self.reload,
            preselected_code=preselected_code,
        )

    # --- Views ---
    def stats(self) -> StatsView:
        return compute_stats(self.snapshot)

    def student_list(self) -> StudentListView:
        return compute_student_list(self.snapshot, self.ui)

    def leaderboard(self) -> LeaderboardView:
        return compute_leaderboard(self.snapshot)

    def detail(self) -> Optional[StudentDetailView]:
        if self.navigator.screen != Screen.DETAIL or self.navigator.selected_code is None:
            return None
        return compute_student_detail(self.snapshot, self.navigator.selected_code)
