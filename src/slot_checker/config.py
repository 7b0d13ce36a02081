"""
Configuration management.

Loads an optional JSON config file and provides typed access to it.
Command-line flags are applied on top by main.
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

from .errors import ConfigError

log = logging.getLogger("slot-checker")

DEFAULT_DEBUG_DIR = Path("debug")
BROWSERS = ("chromium", "firefox", "webkit")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class Config:
    # Browser
    browser: str = "chromium"
    headless: bool = False
    wait_timeout_seconds: float = 30

    # Timing (seconds)
    settle_seconds: float = 10
    observation_seconds: float = 10 * 60

    # Backoff overrides; None keeps the strategy's own range
    min_delay_seconds: Optional[float] = None
    max_delay_seconds: Optional[float] = None
    seed: Optional[int] = None

    # Notification
    video_id: str = "dCE4y9O7vTM"
    telegram_bot_token: str = ""
    telegram_chat_id: str = ""
    discord_webhook_url: str = ""

    # Diagnostics
    debug_dir: Path = DEFAULT_DEBUG_DIR

    def __post_init__(self):
        if self.browser not in BROWSERS:
            raise ConfigError(
                f"Unknown browser {self.browser!r} (expected one of: {', '.join(BROWSERS)})"
            )
        for name in ("wait_timeout_seconds", "settle_seconds", "observation_seconds"):
            if not _is_number(getattr(self, name)):
                raise ConfigError(f"{name} must be a number, got {getattr(self, name)!r}")
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be >= 0")
        for name in ("min_delay_seconds", "max_delay_seconds"):
            value = getattr(self, name)
            if value is not None and not _is_number(value):
                raise ConfigError(f"{name} must be a number, got {value!r}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ConfigError(f"seed must be an integer, got {self.seed!r}")
        if not isinstance(self.headless, bool):
            raise ConfigError(f"headless must be true or false, got {self.headless!r}")
        for name in ("video_id", "telegram_bot_token", "telegram_chat_id", "discord_webhook_url"):
            if not isinstance(getattr(self, name), str):
                raise ConfigError(f"{name} must be a string, got {getattr(self, name)!r}")

    @classmethod
    def from_file(cls, path: Path) -> Config:
        """Load config from JSON file, validate, and return typed Config."""
        if not path.exists():
            log.error("Config file not found at %s", path)
            sys.exit(1)

        try:
            with open(path) as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            log.error("Config file %s is not valid JSON: %s", path, e)
            sys.exit(1)

        if not isinstance(raw, dict):
            raise ConfigError(f"Config file {path} must contain a JSON object")
        return cls.from_dict(raw)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Config:
        known = {f.name for f in fields(cls)}
        for key in raw:
            if key not in known:
                log.warning("Ignoring unknown config key: %s", key)

        values = {k: v for k, v in raw.items() if k in known}
        # Telegram chat ids are often written as bare numbers
        if isinstance(values.get("telegram_chat_id"), int):
            values["telegram_chat_id"] = str(values["telegram_chat_id"])
        try:
            if "debug_dir" in values:
                values["debug_dir"] = Path(values["debug_dir"])
            return cls(**values)
        except TypeError as e:
            raise ConfigError(f"Invalid config: {e}") from e

    def with_overrides(self, **overrides: Any) -> Config:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def delay_range(self, default: tuple[float, float]) -> tuple[float, float]:
        low, high = default
        if self.min_delay_seconds is not None:
            low = self.min_delay_seconds
        if self.max_delay_seconds is not None:
            high = self.max_delay_seconds
        return low, high

    @property
    def has_telegram(self) -> bool:
        return bool(self.telegram_bot_token and self.telegram_chat_id)
