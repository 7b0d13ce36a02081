"""
Page automation capability consumed by strategies and the poller.

Nothing outside browser.py knows which automation library drives the page.
Strategies receive a PageAdapter as an explicit argument, so they can be
exercised against a fake in tests.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence


class PageAdapter(Protocol):
    """Interface every page automation backend implements."""

    def wait_located(self, selector: str) -> Any:
        """Wait until selector is attached. Raises ElementNotFoundError."""
        ...

    def wait_visible(self, handle: Any) -> None:
        """Raises ElementNotInteractableError on timeout."""
        ...

    def wait_enabled(self, handle: Any) -> None:
        """Raises ElementNotInteractableError on timeout."""
        ...

    def click(self, handle: Any) -> None:
        ...

    def type_text(self, handle: Any, text: str) -> None:
        ...

    def navigate(self, url: str) -> None:
        ...

    def refresh(self) -> None:
        ...

    def back(self) -> None:
        ...

    def execute_script(self, code: str) -> Any:
        ...

    def find_all(self, selector: str) -> Sequence[Any]:
        """Elements currently matching selector; empty when none."""
        ...

    def find_within(self, handle: Any, selector: str) -> Any:
        """First descendant of handle matching selector. Raises ElementNotFoundError."""
        ...

    def get_text(self, handle: Any) -> str:
        ...

    def sleep(self, seconds: float) -> None:
        ...


def ready_element(adapter: PageAdapter, selector: str) -> Any:
    """Wait until selector is located, visible and enabled, and return it."""
    handle = adapter.wait_located(selector)
    adapter.wait_visible(handle)
    adapter.wait_enabled(handle)
    return handle


def ready_click(adapter: PageAdapter, selector: str) -> Any:
    handle = ready_element(adapter, selector)
    adapter.click(handle)
    return handle
