"""
Amazon Whole Foods and Amazon Fresh checkout flows.

Selectors and step order come from the live checkout pages. The recovery
sequences in particular are kept exactly as observed; do not collapse them
into a plain reload.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..adapter import ready_click, ready_element
from ..errors import AuthenticationError, DetectionError, RecoveryError
from .base import SiteStrategy, site_step

if TYPE_CHECKING:
    from ..adapter import PageAdapter
    from ..credentials import Credential

log = logging.getLogger("slot-checker")

AMAZON_URL = "https://www.amazon.com"

# Shared cart / checkout selectors
CART_LINK = "a#nav-cart"
ALM_CHECKOUT_BUTTON = 'input[name^="proceedToALMCheckout-"]'
PROCEED_TO_CHECKOUT = 'a[name="proceedToCheckout"]'

# Whole Foods
WHOLEFOOD_BUY_BOX = "#sc-alm-buy-box"
WHOLEFOOD_SUBS_CONTINUE = '#subsContinueButton input[type="submit"]'
WHOLEFOOD_AVAILABILITY_TEXT = ".ufss-date-select-toggle-text-availability"
WHOLEFOOD_AVAILABLE_SLOT = ".ufss-available"

# Fresh
FRESH_BUY_BOX = "#sc-fresh-buy-box"
FRESH_CONTINUE_BOTTOM = 'input[name="continue-bottom"][type="submit"]'
FRESH_SLOT_MESSAGE = "#slot-container-UNATTENDED .a-size-base-plus"
FRESH_NO_WINDOWS_TEXT = "No doorstep delivery windows"


# ---------------------------------------------------------------------------
# Sign-in (shared)
# ---------------------------------------------------------------------------
@site_step(AuthenticationError, "Amazon sign-in")
def sign_in(adapter: PageAdapter, credential: Credential) -> None:
    adapter.navigate(AMAZON_URL)
    ready_click(adapter, '[data-nav-role="signin"]')

    email = ready_element(adapter, 'input[name="email"]')
    adapter.type_text(email, credential.email)
    ready_click(adapter, "#continue")

    password = ready_element(adapter, "#ap_password")
    adapter.type_text(password, credential.password)
    ready_click(adapter, "#signInSubmit")
    log.info("Submitted sign-in form for %s", credential.masked_email)


def _checkout_from_buy_box(adapter: PageAdapter, buy_box_selector: str):
    ready_click(adapter, CART_LINK)
    buy_box = ready_element(adapter, buy_box_selector)
    checkout = adapter.find_within(buy_box, ALM_CHECKOUT_BUTTON)
    adapter.click(checkout)


def _log_messages(adapter: PageAdapter, selector: str) -> list[str]:
    adapter.wait_located(selector)
    texts = [adapter.get_text(el) for el in adapter.find_all(selector)]
    for text in texts:
        log.info("  %s", text)
    return texts


# ---------------------------------------------------------------------------
# Whole Foods
# ---------------------------------------------------------------------------
def go_to_wholefood_checkout(adapter: PageAdapter) -> None:
    _checkout_from_buy_box(adapter, WHOLEFOOD_BUY_BOX)
    ready_click(adapter, PROCEED_TO_CHECKOUT)
    ready_click(adapter, WHOLEFOOD_SUBS_CONTINUE)


@site_step(DetectionError, "Whole Foods availability check")
def wholefood_available(adapter: PageAdapter) -> bool:
    _log_messages(adapter, WHOLEFOOD_AVAILABILITY_TEXT)
    return len(adapter.find_all(WHOLEFOOD_AVAILABLE_SLOT)) > 0


@site_step(RecoveryError, "Whole Foods page refresh")
def refresh_wholefood(adapter: PageAdapter) -> None:
    adapter.refresh()


# ---------------------------------------------------------------------------
# Fresh
# ---------------------------------------------------------------------------
def _double_continue(adapter: PageAdapter):
    ready_click(adapter, PROCEED_TO_CHECKOUT)
    ready_click(adapter, FRESH_CONTINUE_BOTTOM)


def go_to_fresh_checkout(adapter: PageAdapter) -> None:
    _checkout_from_buy_box(adapter, FRESH_BUY_BOX)
    _double_continue(adapter)


@site_step(DetectionError, "Fresh availability check")
def fresh_available(adapter: PageAdapter) -> bool:
    texts = _log_messages(adapter, FRESH_SLOT_MESSAGE)
    return any(FRESH_NO_WINDOWS_TEXT not in text for text in texts)


@site_step(RecoveryError, "Fresh page recovery")
def recover_fresh(adapter: PageAdapter) -> None:
    # A plain refresh asks to resubmit the checkout form; stepping back twice
    # and re-entering through both continue buttons avoids the prompt.
    adapter.back()
    adapter.back()
    adapter.refresh()
    _double_continue(adapter)


WHOLEFOOD = SiteStrategy(
    key="wholefood",
    name="WholeFood",
    sign_in=sign_in,
    navigate_to_target=go_to_wholefood_checkout,
    detect_availability=wholefood_available,
    recover=refresh_wholefood,
    delay_range=(5, 15),
)

FRESH = SiteStrategy(
    key="fresh",
    name="Fresh",
    sign_in=sign_in,
    navigate_to_target=go_to_fresh_checkout,
    detect_availability=fresh_available,
    recover=recover_fresh,
    delay_range=(5, 15),
)
