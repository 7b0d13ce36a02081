"""
Telegram push notification implementation.
"""

from __future__ import annotations

import html
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

import requests

if TYPE_CHECKING:
    from ..state import PollState

log = logging.getLogger("slot-checker")


class TelegramNotifier:
    """Sends notifications via Telegram Bot API."""

    def __init__(self, bot_token: str, chat_id: str):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.api_url = f"https://api.telegram.org/bot{bot_token}/sendMessage"

    def send(self, message: str) -> bool:
        payload = {
            "chat_id": self.chat_id,
            "text": message,
            "parse_mode": "HTML",
            "disable_web_page_preview": True,
        }
        try:
            resp = requests.post(self.api_url, json=payload, timeout=10)
            if resp.status_code != 200:
                log.error("Telegram API error: %s %s", resp.status_code, resp.text)
                return False
            return True
        except requests.RequestException as e:
            log.error("Telegram send failed: %s", e)
            return False

    def send_startup(self, target: str) -> bool:
        return self.send(f"🟢 <b>Slot checker started</b>\nWatching: {html.escape(target)}")

    def send_found(self, target: str, state: PollState) -> bool:
        now = datetime.now(timezone.utc).isoformat()
        return self.send(
            f"🚨🚨🚨 <b>{html.escape(target)} SLOT OPEN</b> 🚨🚨🚨\n\n"
            f"Found after {state.attempt_count} retries — go check out now!\n"
            f"⏰ {now}"
        )

    def send_failure(self, target: str, error: BaseException) -> bool:
        return self.send(
            f"⚠️ <b>Slot checker stopped</b>\n"
            f"<b>{html.escape(target)}</b>: {html.escape(str(error))}"
        )
