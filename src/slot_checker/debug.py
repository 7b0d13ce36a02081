"""
Debug utilities — screenshot and HTML capture when a run fails.

Keeps at most MAX_DEBUG_FILES files in the debug directory.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

log = logging.getLogger("slot-checker")

MAX_DEBUG_FILES = 40  # 20 screenshots + 20 HTML files


def ensure_debug_dir(debug_dir: Path):
    """Create debug directory and drop the oldest files beyond the cap."""
    debug_dir.mkdir(parents=True, exist_ok=True)
    files = sorted(debug_dir.iterdir(), key=lambda f: f.stat().st_mtime)
    while len(files) > MAX_DEBUG_FILES:
        files.pop(0).unlink()


def _slug(label: str) -> str:
    return re.sub(r"[^A-Za-z0-9_-]+", "-", label).strip("-") or "run"


def capture(page: Page, label: str, error_msg: str, debug_dir: Path) -> Optional[Path]:
    """
    Save a screenshot and page HTML of the failed run.

    Files are named with timestamp + label:
        20260217_190900_WholeFood.png
        20260217_190900_WholeFood.html

    Returns the screenshot path, or None if capture failed.
    """
    try:
        ensure_debug_dir(debug_dir)
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        prefix = f"{timestamp}_{_slug(label)}"

        screenshot_path = debug_dir / f"{prefix}.png"
        page.screenshot(path=str(screenshot_path), full_page=False)
        log.info("Debug screenshot saved: %s", screenshot_path)

        html_path = debug_dir / f"{prefix}.html"
        html_path.write_text(page.content(), encoding="utf-8")
        log.info("Debug HTML saved: %s", html_path)

        log.info("Debug context — URL: %s | Error: %s", page.url, error_msg)
        ensure_debug_dir(debug_dir)
        return screenshot_path

    except (OSError, PlaywrightError) as e:
        log.warning("Failed to capture debug info: %s", e)
        return None
