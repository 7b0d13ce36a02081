"""
Unit tests for the Playwright-backed adapter, using mocked Playwright objects.
"""

import time
from unittest.mock import Mock, patch

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from slot_checker.adapter import ready_click
from slot_checker.browser import BrowserManager, PlaywrightPage
from slot_checker.config import Config
from slot_checker.errors import (
    AdapterError,
    DetectionError,
    ElementNotFoundError,
    ElementNotInteractableError,
    NavigationError,
    RecoveryError,
)
from slot_checker.poller import CancelToken
from slot_checker.strategies import amazon


@pytest.fixture
def page():
    return Mock(name="page", url="https://www.amazon.com/cart")


@pytest.fixture
def adapter(page):
    return PlaywrightPage(page, timeout_seconds=2)


class TestPlaywrightPage:
    def test_wait_located_uses_timeout(self, adapter, page):
        handle = adapter.wait_located("#continue")

        assert handle is page.wait_for_selector.return_value
        page.wait_for_selector.assert_called_once_with("#continue", state="attached", timeout=2000)

    def test_wait_located_timeout(self, adapter, page):
        page.wait_for_selector.side_effect = PlaywrightTimeoutError("Timeout 2000ms exceeded")

        with pytest.raises(ElementNotFoundError) as excinfo:
            adapter.wait_located("#continue")
        assert excinfo.value.selector == "#continue"

    def test_wait_enabled_timeout_names_selector(self, adapter, page):
        handle = page.wait_for_selector.return_value
        handle.wait_for_element_state.side_effect = PlaywrightTimeoutError("Timeout")

        located = adapter.wait_located("#signInSubmit")
        with pytest.raises(ElementNotInteractableError, match="#signInSubmit"):
            adapter.wait_enabled(located)

    def test_ready_click_hovers_then_clicks(self, adapter, page):
        handle = page.wait_for_selector.return_value

        ready_click(adapter, "#continue")

        states = [c.args[0] for c in handle.wait_for_element_state.call_args_list]
        assert states == ["visible", "enabled"]
        handle.hover.assert_called_once()
        handle.click.assert_called_once()

    def test_navigation_error(self, adapter, page):
        page.goto.side_effect = PlaywrightError("net::ERR_NAME_NOT_RESOLVED")

        with pytest.raises(NavigationError) as excinfo:
            adapter.navigate("https://www.amazon.com")
        assert excinfo.value.url == "https://www.amazon.com"

    def test_refresh_and_back(self, adapter, page):
        adapter.back()
        adapter.refresh()
        page.go_back.assert_called_once()
        page.reload.assert_called_once()

    def test_find_within_missing(self, adapter, page):
        box = adapter.wait_located("#sc-alm-buy-box")
        box.query_selector.return_value = None

        with pytest.raises(ElementNotFoundError, match="#sc-alm-buy-box"):
            adapter.find_within(box, "input")

    def test_find_all_and_text(self, adapter, page):
        element = Mock()
        element.inner_text.return_value = "  No doorstep delivery windows \n"
        page.query_selector_all.return_value = [element]

        assert [adapter.get_text(e) for e in adapter.find_all(".msg")] == [
            "No doorstep delivery windows"
        ]

    def test_destroyed_context_during_text_lookup(self, adapter, page):
        element = Mock()
        element.inner_text.side_effect = PlaywrightError("Element is not attached to the DOM")

        with pytest.raises(ElementNotFoundError):
            adapter.get_text(element)

    def test_detached_element_while_waiting(self, adapter, page):
        handle = page.wait_for_selector.return_value
        handle.wait_for_element_state.side_effect = PlaywrightError(
            "Element is not attached to the DOM"
        )

        located = adapter.wait_located("#continue")
        with pytest.raises(ElementNotInteractableError) as excinfo:
            adapter.wait_visible(located)
        assert excinfo.value.selector == "#continue"

    def test_script_error(self, adapter, page):
        page.evaluate.side_effect = PlaywrightError("ReferenceError: foo is not defined")

        with pytest.raises(AdapterError, match="foo is not defined"):
            adapter.execute_script("foo()")

    def test_sleep_returns_once_cancelled(self, page):
        cancel = CancelToken()
        cancel.cancel()
        adapter = PlaywrightPage(page, timeout_seconds=2, cancel=cancel)

        started = time.monotonic()
        adapter.sleep(600)
        assert time.monotonic() - started < 1


class TestStepsOverPlaywright:
    """Playwright failures surface as the error kind of the step that hit them."""

    def test_context_destroyed_during_detection(self, page):
        page.query_selector_all.side_effect = PlaywrightError("Execution context was destroyed")

        with pytest.raises(DetectionError) as excinfo:
            amazon.wholefood_available(PlaywrightPage(page, 1))
        assert isinstance(excinfo.value.__cause__, ElementNotFoundError)

    def test_detached_element_during_recovery(self, page):
        handle = page.wait_for_selector.return_value
        handle.hover.side_effect = PlaywrightError("Element is not attached to the DOM")

        with pytest.raises(RecoveryError) as excinfo:
            amazon.recover_fresh(PlaywrightPage(page, 1))
        assert isinstance(excinfo.value.__cause__, ElementNotInteractableError)


class TestBrowserManager:
    def test_page_before_start(self):
        browser = BrowserManager(Config())
        assert not browser.started
        with pytest.raises(RuntimeError):
            browser.page

    def test_stop_before_start_is_noop(self):
        BrowserManager(Config()).stop()

    @patch("slot_checker.browser.sync_playwright")
    def test_launch_failure(self, mock_sync_playwright):
        mock_sync_playwright.return_value.start.side_effect = PlaywrightError(
            "Executable doesn't exist"
        )

        with pytest.raises(AdapterError, match="Could not launch chromium"):
            BrowserManager(Config()).start()
