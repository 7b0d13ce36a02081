"""
Shared pytest fixtures: a fake PageAdapter that records every call.
"""

from __future__ import annotations

import pytest

from slot_checker.errors import ElementNotFoundError, ElementNotInteractableError


class FakeElement:
    def __init__(self, selector: str, text: str = ""):
        self.selector = selector
        self.text = text

    def __repr__(self):
        return f"FakeElement({self.selector!r})"


class FakePage:
    """
    In-memory PageAdapter.

    texts maps a selector to the texts of the elements it matches. Selectors
    in missing never get located; selectors in disabled never get enabled.
    """

    def __init__(self, texts=None, missing=(), disabled=()):
        self.texts: dict[str, list[str]] = dict(texts or {})
        self.missing = set(missing)
        self.disabled = set(disabled)
        self.calls: list[tuple] = []
        self.slept: list[float] = []

    def wait_located(self, selector):
        self.calls.append(("wait_located", selector))
        if selector in self.missing:
            raise ElementNotFoundError(selector, 30)
        return FakeElement(selector)

    def wait_visible(self, handle):
        self.calls.append(("wait_visible", handle.selector))

    def wait_enabled(self, handle):
        self.calls.append(("wait_enabled", handle.selector))
        if handle.selector in self.disabled:
            raise ElementNotInteractableError(handle.selector, "enabled", 30)

    def click(self, handle):
        self.calls.append(("click", handle.selector))

    def type_text(self, handle, text):
        self.calls.append(("type_text", handle.selector, text))

    def navigate(self, url):
        self.calls.append(("navigate", url))

    def refresh(self):
        self.calls.append(("refresh",))

    def back(self):
        self.calls.append(("back",))

    def execute_script(self, code):
        self.calls.append(("execute_script", code))

    def find_all(self, selector):
        self.calls.append(("find_all", selector))
        return [FakeElement(selector, t) for t in self.texts.get(selector, [])]

    def find_within(self, handle, selector):
        self.calls.append(("find_within", handle.selector, selector))
        return FakeElement(selector)

    def get_text(self, handle):
        return handle.text

    def sleep(self, seconds):
        self.calls.append(("sleep", seconds))
        self.slept.append(seconds)

    # --- helpers for assertions ---
    def clicked(self) -> list[str]:
        return [c[1] for c in self.calls if c[0] == "click"]

    def call_names(self) -> list[str]:
        return [c[0] for c in self.calls]


@pytest.fixture
def fake_page():
    return FakePage()
