"""
Site strategy record and the step decorator shared by site modules.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from ..errors import AdapterError, SlotCheckerError

if TYPE_CHECKING:
    from ..adapter import PageAdapter
    from ..credentials import Credential

log = logging.getLogger("slot-checker")


@dataclass(frozen=True)
class SiteStrategy:
    """Everything the runner and poller need to know about one site."""

    key: str
    name: str
    sign_in: Callable[[PageAdapter, Credential], None]
    navigate_to_target: Callable[[PageAdapter], None]
    detect_availability: Callable[[PageAdapter], bool]
    recover: Callable[[PageAdapter], None]
    delay_range: tuple[float, float] = (5, 15)


def site_step(error_cls: type[SlotCheckerError], description: str):
    """
    Re-raise adapter failures inside the decorated step as error_cls.

    The adapter error stays attached as __cause__. Other exceptions pass
    through untouched.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except AdapterError as e:
                raise error_cls(f"{description} failed: {e}", {"step": func.__name__}) from e

        return wrapper

    return decorator
