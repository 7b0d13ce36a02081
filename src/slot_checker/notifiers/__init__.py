"""
Notification system — pluggable notifiers with a common protocol.

Adding a new notifier:
    1. Create a module in this package (e.g., discord.py)
    2. Implement the Notifier protocol
    3. Instantiate it in build_notifiers() below
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..adapter import PageAdapter
    from ..config import Config
    from ..state import PollState

log = logging.getLogger("slot-checker")


# ---------------------------------------------------------------------------
# Notifier protocol
# ---------------------------------------------------------------------------
class Notifier(Protocol):
    """Interface that all notifiers implement."""

    def send(self, message: str) -> bool:
        """Send a raw message. Returns True on success."""
        ...

    def send_startup(self, target: str) -> bool:
        """Polling is about to start for target."""
        ...

    def send_found(self, target: str, state: PollState) -> bool:
        """A slot is open."""
        ...

    def send_failure(self, target: str, error: BaseException) -> bool:
        """The run ended on an error."""
        ...


# ---------------------------------------------------------------------------
# Registry — build notifiers from config
# ---------------------------------------------------------------------------
def build_notifiers(config: Config, adapter: PageAdapter) -> list[Notifier]:
    """Instantiate all configured notifiers."""
    notifiers: list[Notifier] = []

    if config.video_id:
        from .video import VideoNotifier
        notifiers.append(VideoNotifier(adapter, config.video_id))

    if config.has_telegram:
        from .telegram import TelegramNotifier
        notifiers.append(
            TelegramNotifier(config.telegram_bot_token, config.telegram_chat_id)
        )

    if config.discord_webhook_url:
        from .discord import DiscordNotifier
        notifiers.append(DiscordNotifier(config.discord_webhook_url))

    if not notifiers:
        log.warning("No notifiers configured — watch the browser window yourself!")

    return notifiers


def notify_all(notifiers: list[Notifier], method: str, *args, **kwargs):
    """Call a method on all notifiers, catching errors."""
    for notifier in notifiers:
        try:
            getattr(notifier, method)(*args, **kwargs)
        except Exception as e:
            log.error("Notifier %s.%s failed: %s", type(notifier).__name__, method, e)
