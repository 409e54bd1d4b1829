import pytest

from tutor_admin.core.enums import Screen
from tutor_admin.core.exceptions import NavigationError
from tutor_admin.navigation.navigator import Navigator


def test_starts_on_login() -> None:
    nav = Navigator()
    assert nav.screen == Screen.LOGIN
    assert nav.selected_code is None


def test_dashboard_detail_back() -> None:
    nav = Navigator()
    nav.show_dashboard()
    nav.open_detail("S1")
    assert nav.screen == Screen.DETAIL
    assert nav.selected_code == "S1"
    nav.back()
    assert nav.screen == Screen.DASHBOARD
    assert nav.selected_code is None


def test_detail_requires_dashboard() -> None:
    nav = Navigator()
    with pytest.raises(NavigationError):
        nav.open_detail("S1")
    with pytest.raises(NavigationError):
        nav.back()


def test_any_screen_can_return_to_login() -> None:
    nav = Navigator()
    nav.show_dashboard()
    nav.open_detail("S1")
    nav.to_login("Session expired. Please log in again.")
    assert nav.screen == Screen.LOGIN
    assert nav.selected_code is None
    assert nav.login_message == "Session expired. Please log in again."


def test_subscribers_see_every_change() -> None:
    nav = Navigator()
    seen = []
    unsubscribe = nav.subscribe(lambda n: seen.append((n.screen, n.selected_code)))
    nav.show_dashboard()
    nav.open_detail("S2")
    unsubscribe()
    nav.back()
    assert seen == [(Screen.DASHBOARD, None), (Screen.DETAIL, "S2")]
