"""
Browser management — Playwright lifecycle and the PageAdapter built on it.

Encapsulates all Playwright details so the rest of the app only sees the
PageAdapter protocol and the package's own error types.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Optional

from playwright.sync_api import (
    Browser,
    BrowserContext,
    ElementHandle,
    Error as PlaywrightError,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
    sync_playwright,
)

from .errors import (
    AdapterError,
    ElementNotFoundError,
    ElementNotInteractableError,
    NavigationError,
)

if TYPE_CHECKING:
    from .config import Config
    from .poller import CancelToken

log = logging.getLogger("slot-checker")

# Injected into every page to hide the most obvious automation flag
STEALTH_JS = """
Object.defineProperty(navigator, 'webdriver', { get: () => false });
"""

HEADLESS_VIEWPORT = {"width": 1920, "height": 1080}


# ---------------------------------------------------------------------------
# PageAdapter implementation
# ---------------------------------------------------------------------------
class PlaywrightPage:
    """
    PageAdapter over a Playwright sync Page.

    Every wait uses the same timeout. Any Playwright error (timeouts,
    detached elements, destroyed execution contexts) is re-raised as
    ElementNotFoundError / ElementNotInteractableError / NavigationError /
    AdapterError, so callers never see Playwright types.

    sleep() waits on the cancel token when one is given, so a cancelled run
    wakes up immediately instead of sleeping out the full delay.
    """

    def __init__(
        self,
        page: Page,
        timeout_seconds: float,
        cancel: Optional[CancelToken] = None,
    ):
        self.page = page
        self.timeout_seconds = timeout_seconds
        self.cancel = cancel
        # selector per live handle, for error messages; reset on navigation
        self._selectors: dict[int, str] = {}

    @property
    def _timeout_ms(self) -> float:
        return self.timeout_seconds * 1000

    def _remember(self, handle: ElementHandle, selector: str) -> ElementHandle:
        self._selectors[id(handle)] = selector
        return handle

    def _describe(self, handle: ElementHandle) -> str:
        return self._selectors.get(id(handle), "<element>")

    def _timeout_of(self, error: PlaywrightError) -> Optional[float]:
        return self.timeout_seconds if isinstance(error, PlaywrightTimeoutError) else None

    # --- waits -------------------------------------------------------------
    def wait_located(self, selector: str) -> ElementHandle:
        try:
            handle = self.page.wait_for_selector(
                selector, state="attached", timeout=self._timeout_ms
            )
        except PlaywrightError as e:
            raise ElementNotFoundError(selector, self._timeout_of(e)) from e
        if handle is None:
            raise ElementNotFoundError(selector, self.timeout_seconds)
        return self._remember(handle, selector)

    def _wait_state(self, handle: ElementHandle, state: str):
        try:
            handle.wait_for_element_state(state, timeout=self._timeout_ms)
        except PlaywrightError as e:
            raise ElementNotInteractableError(
                self._describe(handle), state, self._timeout_of(e)
            ) from e

    def wait_visible(self, handle: ElementHandle) -> None:
        self._wait_state(handle, "visible")

    def wait_enabled(self, handle: ElementHandle) -> None:
        self._wait_state(handle, "enabled")

    # --- interaction -------------------------------------------------------
    def click(self, handle: ElementHandle) -> None:
        try:
            handle.hover(timeout=self._timeout_ms)
            handle.click(timeout=self._timeout_ms)
        except PlaywrightError as e:
            raise ElementNotInteractableError(
                self._describe(handle), "clickable", self._timeout_of(e)
            ) from e

    def type_text(self, handle: ElementHandle, text: str) -> None:
        try:
            handle.fill(text, timeout=self._timeout_ms)
        except PlaywrightError as e:
            raise ElementNotInteractableError(
                self._describe(handle), "editable", self._timeout_of(e)
            ) from e

    # --- navigation --------------------------------------------------------
    def navigate(self, url: str) -> None:
        log.debug("Navigating to %s", url)
        self._selectors.clear()
        try:
            self.page.goto(url, wait_until="domcontentloaded", timeout=self._timeout_ms)
        except PlaywrightError as e:
            raise NavigationError(f"Could not load {url}: {e.message}", url) from e

    def refresh(self) -> None:
        self._selectors.clear()
        try:
            self.page.reload(wait_until="domcontentloaded", timeout=self._timeout_ms)
        except PlaywrightError as e:
            raise NavigationError(f"Reload failed: {e.message}", self.page.url) from e

    def back(self) -> None:
        self._selectors.clear()
        try:
            self.page.go_back(wait_until="domcontentloaded", timeout=self._timeout_ms)
        except PlaywrightError as e:
            raise NavigationError(f"Back navigation failed: {e.message}", self.page.url) from e

    def execute_script(self, code: str) -> Any:
        try:
            return self.page.evaluate(code)
        except PlaywrightError as e:
            raise AdapterError(f"Script failed: {e.message}") from e

    # --- queries -----------------------------------------------------------
    def find_all(self, selector: str) -> list[ElementHandle]:
        try:
            handles = self.page.query_selector_all(selector)
        except PlaywrightError as e:
            raise ElementNotFoundError(selector) from e
        return [self._remember(h, selector) for h in handles]

    def find_within(self, handle: ElementHandle, selector: str) -> ElementHandle:
        described = f"{self._describe(handle)} {selector}"
        try:
            child = handle.query_selector(selector)
        except PlaywrightError as e:
            raise ElementNotFoundError(described) from e
        if child is None:
            raise ElementNotFoundError(described)
        return self._remember(child, selector)

    def get_text(self, handle: ElementHandle) -> str:
        try:
            return handle.inner_text().strip()
        except PlaywrightError as e:
            raise ElementNotFoundError(self._describe(handle)) from e

    def sleep(self, seconds: float) -> None:
        if self.cancel is None:
            time.sleep(seconds)
        else:
            self.cancel.wait(seconds)


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------
class BrowserManager:
    """
    Manages the Playwright browser lifecycle.

    One browser, one context, one page per run. The page is exposed both
    raw (for debug capture) and wrapped as a PlaywrightPage adapter.
    """

    def __init__(self, config: Config, cancel: Optional[CancelToken] = None):
        self.config = config
        self.cancel = cancel
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None
        self._adapter: PlaywrightPage | None = None

    def start(self) -> PlaywrightPage:
        """Launch browser, create context and page, return the adapter."""
        headless = self.config.headless
        log.info(
            "Launching %s (%s)...",
            self.config.browser,
            "headless" if headless else "headed",
        )
        try:
            self._launch(headless)
        except PlaywrightError as e:
            raise AdapterError(f"Could not launch {self.config.browser}: {e.message}") from e

        self._adapter = PlaywrightPage(
            self._page, self.config.wait_timeout_seconds, self.cancel
        )
        return self._adapter

    def _launch(self, headless: bool):
        self._playwright = sync_playwright().start()
        browser_type = getattr(self._playwright, self.config.browser)

        launch_args = {"headless": headless}
        if self.config.browser == "chromium":
            launch_args["args"] = [
                "--disable-blink-features=AutomationControlled",
                "--start-maximized",
            ]
        self._browser = browser_type.launch(**launch_args)

        if headless:
            self._context = self._browser.new_context(viewport=HEADLESS_VIEWPORT)
        else:
            self._context = self._browser.new_context(no_viewport=True)
        self._context.add_init_script(STEALTH_JS)
        self._page = self._context.new_page()
        self._page.set_default_timeout(self.config.wait_timeout_seconds * 1000)

    def stop(self):
        """Clean shutdown."""
        try:
            if self._page:
                self._page.close()
            if self._context:
                self._context.close()
            if self._browser:
                self._browser.close()
            if self._playwright:
                self._playwright.stop()
        except PlaywrightError as e:
            log.warning("Error during browser shutdown: %s", e)

    @property
    def started(self) -> bool:
        return self._page is not None

    @property
    def page(self) -> Page:
        if self._page is None:
            raise RuntimeError("Browser not started — call start() first")
        return self._page

    @property
    def adapter(self) -> PlaywrightPage:
        if self._adapter is None:
            raise RuntimeError("Browser not started — call start() first")
        return self._adapter

    def __enter__(self) -> BrowserManager:
        return self

    def __exit__(self, *exc_info):
        self.stop()
