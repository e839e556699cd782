"""Field extractors for the raw receipt payload.

The upstream payload is an uncontrolled third-party document, so every
extractor checks the type and shape of what it reads and falls back to a
documented default instead of raising.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any

from slyp_receipts.extractors.money import DEFAULT_CURRENCY, is_number, round2
from slyp_receipts.schemas.receipt import (
    MerchantInfo,
    ReceiptIdentities,
    ReceiptTimestamps,
    ReturnsPolicy,
    StoreAddress,
)


def compact(**fields: Any) -> dict[str, Any]:
    """Drop None values so absent fields stay unset on constructed records."""
    return {key: value for key, value in fields.items() if value is not None}


def get_mapping(node: Any, key: str) -> dict[str, Any]:
    """Return ``node[key]`` when both are mappings, else an empty dict."""
    if not isinstance(node, dict):
        return {}
    value = node.get(key)
    return value if isinstance(value, dict) else {}


def get_list(node: Any, key: str) -> list[Any]:
    """Return ``node[key]`` when it is a list, else an empty list."""
    if not isinstance(node, dict):
        return []
    value = node.get(key)
    return value if isinstance(value, list) else []


def as_text(value: Any) -> str | None:
    """Return non-empty strings as-is and integers as strings; None otherwise."""
    if isinstance(value, str):
        return value or None
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return None


def first_text(*values: Any) -> str | None:
    """Return the first value that ``as_text`` accepts."""
    for value in values:
        text = as_text(value)
        if text is not None:
            return text
    return None


def as_count(value: Any) -> int | float | None:
    """Return a numeric count, turning integral floats into ints."""
    if not is_number(value):
        return None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def extract_quantity(raw: Any) -> int | float:
    """Purchased quantity; missing, zero, negative or non-numeric values become 1."""
    if is_number(raw) and raw > 0:
        return as_count(raw)  # type: ignore[return-value]
    return 1


def extract_unit_price(raw: Any) -> float:
    """Unit price rounded to 2 decimals, 0 when missing or non-numeric."""
    return round2(raw) if is_number(raw) else 0.0


def resolve_currency(*candidates: Any, default: str = DEFAULT_CURRENCY) -> str:
    """Return the first non-empty currency code among candidates, else default."""
    for candidate in candidates:
        if isinstance(candidate, str) and candidate:
            return candidate
    return default


def extract_discount_total(raw: Any) -> float | None:
    """Coerce the upstream discount total to a finite float.

    Returns None (unknown or none) for missing values, booleans, empty
    strings and anything that does not parse to a finite number.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if is_number(raw):
        return float(raw)
    if isinstance(raw, str) and raw.strip():
        try:
            number = float(raw.strip())
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def extract_tax_amount(raw: Any) -> float:
    """Tax line amount from ``{"price": n}`` or a bare number, else 0."""
    if isinstance(raw, dict) and is_number(raw.get("price")):
        return float(raw["price"])
    if is_number(raw):
        return float(raw)
    return 0.0


def extract_tax_type(line: dict[str, Any]) -> str | None:
    return first_text(line.get("tax_type"), get_mapping(line, "amount").get("tax_type"))


def parse_iso_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    A trailing ``Z`` is accepted and naive values are taken as UTC. Values that
    fall outside the datetime range once converted to UTC give None.
    """
    if not isinstance(value, str) or not value:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        return None


def _from_epoch(epoch: float) -> datetime | None:
    try:
        return datetime.fromtimestamp(epoch, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def extract_timestamps(payload: dict[str, Any]) -> ReceiptTimestamps:
    """Issue time as epoch, ISO string and derived UTC date/time."""
    epoch = payload.get("issued_at")
    epoch = epoch if is_number(epoch) else None
    iso = as_text(payload.get("issued_at_iso"))

    # The ISO string wins when present, even if it fails to parse.
    if iso:
        issued = parse_iso_timestamp(iso)
    elif epoch:
        issued = _from_epoch(epoch)
    else:
        issued = None

    merchant_detail = get_mapping(payload, "merchant_detail")
    return ReceiptTimestamps.model_construct(
        **compact(
            issued_at_epoch=epoch,
            issued_at_iso=iso,
            issued_date=issued.strftime("%Y-%m-%d") if issued else None,
            issued_time=issued.strftime("%H:%M") if issued else None,
            timezone=first_text(
                merchant_detail.get("timezone"), payload.get("issued_at_timezone")
            ),
        )
    )


def extract_identities(payload: dict[str, Any]) -> ReceiptIdentities:
    order = get_mapping(payload, "order_number_detail")
    return ReceiptIdentities.model_construct(
        **compact(
            external_receipt_id=as_text(payload.get("external_id")),
            order_number=first_text(order.get("value"), order.get("order_number")),
            receipt_type=as_text(payload.get("receipt_type")),
            is_tax_invoice=bool(payload.get("is_tax_invoice")),
        )
    )


def extract_address(merchant_detail: dict[str, Any]) -> StoreAddress | None:
    """Store address, or None when the payload carries no address object.

    ``full`` joins the present street, street2, suburb, state and postcode
    parts with ", ".
    """
    source = get_mapping(merchant_detail, "address")
    if not source:
        return None

    parts = {
        "street": as_text(source.get("street")),
        "street2": as_text(source.get("street_2")),
        "suburb": as_text(source.get("suburb")),
        "state": as_text(source.get("state")),
        "postcode": as_text(source.get("postcode")),
    }
    full = ", ".join(part for part in parts.values() if part)
    return StoreAddress.model_construct(
        **compact(**parts, country_code=as_text(source.get("country_code"))),
        full=full,
    )


def extract_merchant(payload: dict[str, Any]) -> MerchantInfo:
    merchant_detail = get_mapping(payload, "merchant_detail")
    return MerchantInfo.model_construct(
        **compact(
            merchant_name=first_text(
                get_mapping(payload, "root_merchant").get("trading_name"),
                get_mapping(payload, "issuing_merchant").get("trading_name"),
            ),
            store_name=first_text(
                get_mapping(payload, "store").get("name"), merchant_detail.get("name")
            ),
            abn=as_text(merchant_detail.get("abn")),
            phone=as_text(merchant_detail.get("phone_number")),
            address=extract_address(merchant_detail),
        )
    )


def extract_returns_policy(payload: dict[str, Any]) -> ReturnsPolicy | None:
    if not isinstance(payload.get("returns"), dict):
        return None
    returns = payload["returns"]
    period = returns.get("return_period")
    return ReturnsPolicy.model_construct(
        **compact(
            barcode=as_text(returns.get("return_barcode")),
            period_days=period if is_number(period) and period else None,
            policy_text=as_text(returns.get("return_policy_text")),
        )
    )
