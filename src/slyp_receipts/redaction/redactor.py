"""In-place masking of sensitive receipt fields.

Redaction is the only operation that mutates an assembled receipt. Masking is
idempotent: already-masked values expose too few digits to be masked again.
"""

from __future__ import annotations

import logging
import re

from slyp_receipts.core.config import RedactionConfig
from slyp_receipts.core.exceptions import PIIViolationError
from slyp_receipts.schemas.receipt import Receipt

CARD_MASK = "****"

_DIGIT_RE = re.compile(r"\d")
_SEPARATOR_RE = re.compile(r"[\s-]")

logger = logging.getLogger(__name__)


def _digits(value: str) -> str:
    return "".join(_DIGIT_RE.findall(value))


def mask_tail(value: str | None, config: RedactionConfig) -> str | None:
    """Replace a phone/ABN-like value with the mask prefix and its last digits.

    Values with fewer than ``config.min_digits`` digits are returned unchanged.

    Example:
        ```python
        mask_tail("02 9991 2345", RedactionConfig())  # '***2345'
        mask_tail("1234", RedactionConfig())          # '1234'
        ```
    """
    if not isinstance(value, str):
        return value
    digits = _digits(value)
    if len(digits) < config.min_digits:
        return value
    return config.mask_prefix + digits[-config.visible_digits :]


def mask_card(value: str | None, config: RedactionConfig) -> str | None:
    """Rewrite an over-exposed masked number to ``"**** DDDD"``.

    Values exposing no more than ``config.visible_digits`` digits are kept.
    """
    if not isinstance(value, str):
        return value
    digits = _digits(value)
    if len(digits) <= config.visible_digits:
        return value
    return f"{CARD_MASK} {digits[-config.visible_digits :]}"


def find_pii(receipt: Receipt, config: RedactionConfig | None = None) -> list[str]:
    """Return dotted paths of sensitive fields that still hold a long digit run.

    Spaces and hyphens are ignored when looking for a run of
    ``config.min_digits`` or more digits.
    """
    config = config or RedactionConfig()
    long_run = re.compile(rf"\d{{{config.min_digits},}}")

    candidates: list[tuple[str, str | None]] = [
        ("merchant.phone", receipt.merchant.phone),
        ("merchant.abn", receipt.merchant.abn),
    ]
    candidates += [
        (f"payments.{i}.maskedCard", payment.masked_card)
        for i, payment in enumerate(receipt.payments)
    ]
    candidates += [
        (f"loyaltyPrograms.{i}.maskedId", program.masked_id)
        for i, program in enumerate(receipt.loyalty_programs or [])
    ]

    return [
        path
        for path, value in candidates
        if isinstance(value, str) and long_run.search(_SEPARATOR_RE.sub("", value))
    ]


def redact_receipt(
    receipt: Receipt,
    enforce: bool = False,
    config: RedactionConfig | None = None,
) -> None:
    """Mask sensitive fields of a receipt in place.

    Merchant phone and ABN keep only their last digits behind a fixed prefix;
    payment masked cards and loyalty ids exposing too many digits are
    rewritten to ``"**** DDDD"``.

    Args:
        receipt: Receipt to mutate.
        enforce: Verify afterwards that no sensitive digit run remains.
        config: Redaction configuration (defaults to RedactionConfig()).

    Raises:
        PIIViolationError: If ``enforce`` is set and a sensitive field still
            contains a long digit run.
    """
    config = config or RedactionConfig()
    merchant = receipt.merchant

    if merchant.phone is not None:
        merchant.phone = mask_tail(merchant.phone, config)
    if merchant.abn is not None:
        merchant.abn = mask_tail(merchant.abn, config)

    for payment in receipt.payments:
        if payment.masked_card is not None:
            payment.masked_card = mask_card(payment.masked_card, config)

    for program in receipt.loyalty_programs or []:
        if program.masked_id is not None:
            program.masked_id = mask_card(program.masked_id, config)

    if not enforce:
        return

    violations = find_pii(receipt, config)
    if violations:
        logger.error("PII remains after redaction in: %s", ", ".join(violations))
        raise PIIViolationError(
            f"Unmasked sensitive data in {len(violations)} field(s): {', '.join(violations)}",
            violations=violations,
        )
