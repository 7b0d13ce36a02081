"""
Alarm video — opens a YouTube video in the running browser session.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..adapter import PageAdapter
    from ..state import PollState

log = logging.getLogger("slot-checker")

YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


class VideoNotifier:
    """Plays a video in a new tab so the operator hears the alert."""

    def __init__(self, adapter: PageAdapter, video_id: str):
        self.adapter = adapter
        self.video_id = video_id

    @property
    def url(self) -> str:
        return YOUTUBE_WATCH_URL.format(video_id=self.video_id)

    def send(self, message: str) -> bool:
        script = f"void window.open({json.dumps(self.url)}, '_blank')"
        self.adapter.execute_script(script)
        log.info("Opened alarm video %s", self.url)
        return True

    def send_startup(self, target: str) -> bool:
        return True

    def send_found(self, target: str, state: PollState) -> bool:
        return self.send(f"{target} slot found")

    def send_failure(self, target: str, error: BaseException) -> bool:
        return True
