"""
Discord webhook notification implementation.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import requests

if TYPE_CHECKING:
    from ..state import PollState

log = logging.getLogger("slot-checker")


class DiscordNotifier:
    """Sends notifications via Discord webhook."""

    def __init__(self, webhook_url: str):
        self.webhook_url = webhook_url

    def send(self, message: str) -> bool:
        try:
            # 204 No Content unless ?wait=true
            resp = requests.post(self.webhook_url, json={"content": message}, timeout=10)
            if resp.status_code not in (200, 204):
                log.error("Discord webhook error: %s %s", resp.status_code, resp.text)
                return False
            return True
        except requests.RequestException as e:
            log.error("Discord send failed: %s", e)
            return False

    def send_startup(self, target: str) -> bool:
        return self.send(f":green_circle: Slot checker started — watching **{target}**")

    def send_found(self, target: str, state: PollState) -> bool:
        return self.send(
            f":rotating_light: **{target} slot open** after {state.attempt_count} retries"
            " — go check out now!"
        )

    def send_failure(self, target: str, error: BaseException) -> bool:
        return self.send(f":warning: Slot checker stopped on **{target}**: {error}")
