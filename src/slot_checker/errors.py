"""
Error taxonomy.

Adapter errors describe a page element or navigation that never reached the
required state. Strategy steps translate them into the error kind of the
step that failed and chain the adapter error as the cause.
"""

from __future__ import annotations

from typing import Any, Optional


class SlotCheckerError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigError(SlotCheckerError):
    """Invalid configuration value."""


class UnknownProductError(SlotCheckerError):
    """No strategy is registered under the requested product key."""

    def __init__(self, product_key: str, known: Optional[list[str]] = None):
        self.product_key = product_key
        self.known = known or []
        message = f"Unknown product {product_key!r}"
        if self.known:
            message += f" (expected one of: {', '.join(self.known)})"
        super().__init__(message, {"product_key": product_key})


# ---------------------------------------------------------------------------
# Adapter errors
# ---------------------------------------------------------------------------
class AdapterError(SlotCheckerError):
    """The page automation layer could not complete an operation."""


class ElementNotFoundError(AdapterError):
    def __init__(self, selector: str, timeout: Optional[float] = None):
        self.selector = selector
        self.timeout = timeout
        message = f"Element {selector!r} not found"
        if timeout is not None:
            message += f" within {timeout:g}s"
        super().__init__(message, {"selector": selector})


class ElementNotInteractableError(AdapterError):
    def __init__(self, selector: str, state: str, timeout: Optional[float] = None):
        self.selector = selector
        self.state = state
        message = f"Element {selector!r} never became {state}"
        if timeout is not None:
            message += f" within {timeout:g}s"
        super().__init__(message, {"selector": selector, "state": state})


class NavigationError(AdapterError):
    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message, {"url": url})


# ---------------------------------------------------------------------------
# Strategy step errors
# ---------------------------------------------------------------------------
class AuthenticationError(SlotCheckerError):
    """Sign-in did not complete."""


class DetectionError(SlotCheckerError):
    """The availability check could not inspect the page."""


class RecoveryError(SlotCheckerError):
    """The page could not be returned to a checkable state."""


class PollCancelled(SlotCheckerError):
    """The poll loop was stopped through its cancellation token."""
