"""Which of the three screens is active: login, dashboard, or one student's detail."""

import logging
from typing import Callable, List, Optional

from tutor_admin.core.enums import Screen
from tutor_admin.core.exceptions import NavigationError

logger = logging.getLogger(__name__)

ScreenListener = Callable[["Navigator"], None]


class Navigator:
    def __init__(self) -> None:
        self.screen = Screen.LOGIN
        self.selected_code: Optional[str] = None
        # Shown on the login screen after a rejected code or lost session.
        self.login_message: Optional[str] = None
        self._listeners: List[ScreenListener] = []

    def subscribe(self, listener: ScreenListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def show_dashboard(self) -> None:
        """Every successful load lands on the dashboard, including reloads started from a detail screen."""
        self._go(Screen.DASHBOARD, None, None)

    def open_detail(self, code: str) -> None:
        if self.screen != Screen.DASHBOARD:
            raise NavigationError("Student detail opens from the dashboard")
        self._go(Screen.DETAIL, code, None)

    def back(self) -> None:
        if self.screen != Screen.DETAIL:
            raise NavigationError("Not on a detail screen")
        self._go(Screen.DASHBOARD, None, None)

    def to_login(self, message: Optional[str] = None) -> None:
        """Logout or session loss; allowed from every screen."""
        self._go(Screen.LOGIN, None, message)

    def _go(self, screen: Screen, code: Optional[str], message: Optional[str]) -> None:
        logger.debug("Screen %s -> %s", self.screen.value, screen.value)
        self.screen = screen
        self.selected_code = code
        self.login_message = message
        for listener in list(self._listeners):
            listener(self)
