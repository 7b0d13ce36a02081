#!/usr/bin/env python3
"""
Amazon slot checker — main entry point.

Orchestrates one run:
    1. Resolve the product strategy and load config
    2. Prompt for credentials, launch browser
    3. Sign in → reach checkout → poll until a slot opens
    4. Alert, keep the window open for the operator, close
"""

from __future__ import annotations

import argparse
import logging
import random
import signal
import sys
from pathlib import Path
from typing import Callable, Optional

from . import __version__
from .browser import BrowserManager
from .config import BROWSERS, Config
from .credentials import Credential, prompt_credential
from .debug import capture as capture_debug
from .errors import ConfigError, PollCancelled, SlotCheckerError, UnknownProductError
from .notifiers import Notifier, build_notifiers, notify_all
from .poller import BackoffPolicy, CancelToken, poll
from .strategies import STRATEGIES, SiteStrategy, resolve

log = logging.getLogger("slot-checker")


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
def configure_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slot-checker",
        description="Watch an Amazon checkout page until a delivery slot opens.",
    )
    parser.add_argument(
        "product",
        help=f"Product to watch ({', '.join(sorted(STRATEGIES))})",
    )
    parser.add_argument("--config", type=Path, help="Path to a JSON config file")
    parser.add_argument("--browser", choices=BROWSERS, default=None)
    parser.add_argument(
        "--headless",
        action="store_true",
        default=None,
        help="Run without a visible window",
    )
    parser.add_argument("--min-delay", type=float, dest="min_delay_seconds")
    parser.add_argument("--max-delay", type=float, dest="max_delay_seconds")
    parser.add_argument("--seed", type=int, help="Seed for the retry delay jitter")
    parser.add_argument(
        "--observe",
        type=float,
        dest="observation_seconds",
        help="Seconds to keep the browser open after a slot is found",
    )
    parser.add_argument("--debug-dir", type=Path, dest="debug_dir")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
def run(
    config: Config,
    strategy: SiteStrategy,
    policy: BackoffPolicy,
    credential: Credential,
    cancel: Optional[CancelToken] = None,
    browser_factory: Callable[[Config, CancelToken], BrowserManager] = BrowserManager,
) -> int:
    """Drive one checker session. Returns the process exit code."""
    cancel = cancel or CancelToken()
    browser = browser_factory(config, cancel)
    notifiers: list[Notifier] = []

    def report_failure(error: BaseException):
        if browser.started:
            capture_debug(browser.page, strategy.name, str(error), config.debug_dir)
        notify_all(notifiers, "send_failure", strategy.name, error)

    try:
        adapter = browser.start()
        notifiers = build_notifiers(config, adapter)
        notify_all(notifiers, "send_startup", strategy.name)

        strategy.sign_in(adapter, credential)
        strategy.navigate_to_target(adapter)
        # Allow the checkout page to finish loading before the first check
        adapter.sleep(config.settle_seconds)
        cancel.raise_if_cancelled()

        log.info("Polling %s with %r", strategy.name, policy)
        state = poll(adapter, strategy, policy, cancel)

        log.info("Found!")
        notify_all(notifiers, "send_found", strategy.name, state)

        # Leave the window open for the operator to come see the screen
        log.info("Keeping the browser open for %.0f seconds", config.observation_seconds)
        adapter.sleep(config.observation_seconds)
        if cancel.cancelled:
            log.info("Observation window cut short")
        log.info("Done!")
        return 0

    except PollCancelled:
        log.info("Shutting down...")
        return 0

    except KeyboardInterrupt:
        log.info("Interrupted — shutting down...")
        return 130

    except SlotCheckerError as e:
        log.error("Run failed: %s", e)
        if e.__cause__ is not None:
            log.error("Caused by: %s", e.__cause__)
        report_failure(e)
        return 1

    except Exception as e:
        log.exception("Run failed with unexpected error: %s", e)
        report_failure(e)
        return 1

    finally:
        browser.stop()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        strategy = resolve(args.product)
        config = Config.from_file(args.config) if args.config else Config()
        config = config.with_overrides(
            browser=args.browser,
            headless=args.headless,
            min_delay_seconds=args.min_delay_seconds,
            max_delay_seconds=args.max_delay_seconds,
            seed=args.seed,
            observation_seconds=args.observation_seconds,
            debug_dir=args.debug_dir,
        )
        policy = BackoffPolicy(
            *config.delay_range(strategy.delay_range),
            rng=random.Random(config.seed),
        )
    except (UnknownProductError, ConfigError) as e:
        log.error("%s", e)
        return 2

    log.info("=" * 50)
    log.info("Amazon slot checker %s — %s", __version__, strategy.name)
    log.info("=" * 50)

    try:
        credential = prompt_credential()
    except KeyboardInterrupt:
        log.info("Interrupted — shutting down...")
        return 130
    except EOFError:
        log.error("No credentials entered (stdin closed)")
        return 1

    cancel = CancelToken()
    signal.signal(signal.SIGTERM, lambda signum, frame: cancel.cancel())

    return run(config, strategy, policy, credential, cancel)


if __name__ == "__main__":
    sys.exit(main())
