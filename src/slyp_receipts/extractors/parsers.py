"""Pattern-table parsers for free-text fields of the receipt payload.

Each parser takes a raw value of any type and returns a normalized value or
None. None of them raise on unexpected input.

Parsers:
- parse_item_properties: "Key: Value" product property entries
- normalize_payment_method: card scheme / wallet classification
- extract_method_label: payment label from a payment descriptor
- extract_masked_card: masked card digits from a payment descriptor
- extract_loyalty_id: masked member id from a loyalty description
- parse_payment_slip: terminal slip key/value lines
"""

from __future__ import annotations

import re
from typing import Any

from slyp_receipts.schemas.receipt import PaymentCardMeta

# Property keys kept from product item_properties, mapped to ReceiptItem fields
ITEM_PROPERTY_KEYS: dict[str, str] = {
    "SKU": "sku",
    "APN": "apn",
    "Colour": "colour",
    "Size": "size",
}

# Checked in order; first match wins
PAYMENT_METHOD_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"VISA"), "VISA"),
    (re.compile(r"MASTERCARD|MC"), "MASTERCARD"),
    (re.compile(r"AMEX|AMERICAN EXPRESS"), "AMEX"),
    (re.compile(r"APPLE PAY"), "APPLE_PAY"),
    (re.compile(r"GOOGLE PAY|G PAY"), "GOOGLE_PAY"),
]

# Slip label -> PaymentCardMeta field
PAYMENT_SLIP_LABELS: dict[str, str] = {
    "MERCHANT ID": "merchant_id",
    "TERMINAL ID": "terminal_id",
    "STAN": "stan",
    "RRN": "rrn",
    "AUTH": "auth_code",
    "ACCT TYPE": "account_type",
    "TRANS TYPE": "transaction_type",
}

_METHOD_LABEL_RE = re.compile(r"^([A-Za-z ]+?)(?:\s*\(|$)")
_MASKED_DIGITS_RE = re.compile(r"\*+\s*(\d{2,4})")
_LOYALTY_ID_RE = re.compile(r"Loyalty ID:\s*(.*)$", re.IGNORECASE)
_SLIP_LINE_RES = {
    label: re.compile(rf"^{re.escape(label)}:\s*(.+)$", re.IGNORECASE)
    for label in PAYMENT_SLIP_LABELS
}


def parse_item_properties(properties: Any) -> dict[str, str]:
    """Parse product item_properties into recognized ReceiptItem fields.

    Entries look like ``{"title": "SKU: 123-456"}``. The title is split on the
    first colon; unknown keys and malformed entries are skipped.

    Returns:
        Mapping of ReceiptItem field name (``sku``, ``apn``, ``colour``,
        ``size``) to value. Later entries overwrite earlier ones.
    """
    fields: dict[str, str] = {}
    if not isinstance(properties, list):
        return fields

    for entry in properties:
        if not isinstance(entry, dict):
            continue
        title = entry.get("title")
        if not isinstance(title, str) or ":" not in title:
            continue
        key, value = title.split(":", 1)
        field_name = ITEM_PROPERTY_KEYS.get(key.strip())
        if field_name:
            fields[field_name] = value.strip()
    return fields


def normalize_payment_method(label: Any) -> str | None:
    """Classify a payment label into a canonical method name.

    Example:
        ```python
        normalize_payment_method("Visa Debit")   # 'VISA'
        normalize_payment_method("Google Pay")   # 'GOOGLE_PAY'
        normalize_payment_method("WeirdThing")   # 'WEIRDTHING'
        normalize_payment_method("")             # None
        ```
    """
    text = label.upper() if isinstance(label, str) else ""
    for pattern, method in PAYMENT_METHOD_PATTERNS:
        if pattern.search(text):
            return method
    return text or None


def extract_method_label(descriptor: Any) -> str | None:
    """Return the leading alphabetic label of a descriptor like ``"VISA (**** 1234)"``."""
    if not isinstance(descriptor, str):
        return None
    match = _METHOD_LABEL_RE.match(descriptor)
    return match.group(1).strip() if match else None


def extract_masked_card(descriptor: Any) -> str | None:
    """Render masked card digits found in a payment descriptor as ``"**** *DDDD"``."""
    if not isinstance(descriptor, str):
        return None
    match = _MASKED_DIGITS_RE.search(descriptor)
    return f"**** *{match.group(1)}" if match else None


def extract_loyalty_id(description: Any) -> str | None:
    """Return the text following ``Loyalty ID:`` in a loyalty description."""
    if not isinstance(description, str):
        return None
    match = _LOYALTY_ID_RE.search(description)
    return match.group(1).strip() if match else None


def parse_payment_slip(raw_text: Any) -> PaymentCardMeta | None:
    """Parse the multi-line terminal slip into PaymentCardMeta.

    Lines are trimmed and blank lines dropped; the first line matching each
    label wins. Returns None when there is no slip text.
    """
    if not isinstance(raw_text, str) or not raw_text:
        return None

    lines = [line.strip() for line in re.split(r"\r?\n", raw_text)]
    lines = [line for line in lines if line]

    fields: dict[str, Any] = {"raw_text": raw_text}
    for label, field_name in PAYMENT_SLIP_LABELS.items():
        pattern = _SLIP_LINE_RES[label]
        for line in lines:
            match = pattern.match(line)
            if match:
                fields[field_name] = match.group(1).strip()
                break
    return PaymentCardMeta.model_construct(**fields)
