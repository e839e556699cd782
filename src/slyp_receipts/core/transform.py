"""Assemble a normalized Receipt from a raw receipt API payload."""

from __future__ import annotations

import hashlib
import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from slyp_receipts.core.aggregation import aggregate_items
from slyp_receipts.core.config import TransformConfig
from slyp_receipts.extractors.fields import (
    as_count,
    compact,
    extract_discount_total,
    extract_identities,
    extract_merchant,
    extract_quantity,
    extract_returns_policy,
    extract_tax_amount,
    extract_tax_type,
    extract_timestamps,
    extract_unit_price,
    first_text,
    get_list,
    get_mapping,
    resolve_currency,
)
from slyp_receipts.extractors.money import format_money, is_number, round2
from slyp_receipts.extractors.parsers import (
    extract_loyalty_id,
    extract_masked_card,
    extract_method_label,
    normalize_payment_method,
    parse_item_properties,
    parse_payment_slip,
)
from slyp_receipts.schemas.receipt import (
    SCHEMA_VERSION,
    LoyaltyProgram,
    PaymentDetail,
    PaymentSummary,
    Receipt,
    ReceiptItem,
    ReceiptMeta,
    ReceiptTotals,
    TaxLine,
)

TRANSFORM_VERSION = "1.1.0"
SOURCE = "slyp"
UNKNOWN_ITEM_NAME = "Unknown Item"

RECEIPT_ID_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "https://schemas.local/receipt")

logger = logging.getLogger(__name__)


def compute_raw_hash(raw: Any) -> str | None:
    """SHA-256 hex digest of the compact JSON serialization of ``raw``.

    Returns None when the payload cannot be serialized as strict JSON
    (including NaN and infinite floats).
    """
    try:
        canonical = json.dumps(raw, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError, RecursionError) as e:
        logger.warning("Could not hash raw receipt payload: %s", e)
        return None
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def compute_receipt_id(raw: Any, raw_hash: str | None = None) -> str:
    """Stable UUID for a receipt payload.

    Derived from the upstream ``external_id`` when present, else from the raw
    payload hash, else from ``total_price`` and ``issued_at``. If reading the
    payload fails a random UUID is returned instead.
    """
    try:
        payload = raw if isinstance(raw, dict) else {}
        external_id = payload.get("external_id")
        if isinstance(external_id, str) and external_id:
            name = f"external:{external_id}"
        elif raw_hash:
            name = f"hash:{raw_hash}"
        else:
            name = f"fallback:{payload.get('total_price')}|{payload.get('issued_at')}"
        return str(uuid.uuid5(RECEIPT_ID_NAMESPACE, name))
    except Exception:
        logger.warning("Could not derive receipt id, using a random one", exc_info=True)
        return str(uuid.uuid4())


def _now_iso() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_item(
    entry: dict[str, Any], payload_currency: Any, config: TransformConfig
) -> ReceiptItem:
    """Normalize one basket entry into a ReceiptItem."""
    product = get_mapping(entry, "product")
    pricing = get_mapping(product, "pricing")

    quantity = extract_quantity(product.get("quantity_purchased"))
    unit_price = extract_unit_price(pricing.get("price"))
    currency = resolve_currency(
        pricing.get("currency_code"), payload_currency, default=config.default_currency
    )
    line_total = round2(unit_price * quantity)
    discount = pricing.get("discount")
    tax = pricing.get("tax")

    return ReceiptItem.model_construct(
        name=first_text(product.get("name"), product.get("title")) or UNKNOWN_ITEM_NAME,
        **parse_item_properties(product.get("item_properties")),
        unit_price=unit_price,
        unit_price_formatted=format_money(unit_price, currency, config.locale),
        quantity=quantity,
        line_total=line_total,
        line_total_formatted=format_money(line_total, currency, config.locale),
        **compact(
            discount=discount if is_number(discount) else None,
            tax=tax if is_number(tax) else None,
        ),
        currency=currency,
    )


def build_payment(entry: dict[str, Any], currency: str, config: TransformConfig) -> PaymentDetail:
    """Normalize one payment entry into a PaymentDetail."""
    amount = round2(entry["amount"]) if is_number(entry.get("amount")) else 0.0
    raw_name = entry.get("name") if isinstance(entry.get("name"), str) else ""
    label = first_text(entry.get("payment_method_type")) or extract_method_label(raw_name)

    return PaymentDetail.model_construct(
        **compact(
            method=normalize_payment_method(label),
            masked_card=extract_masked_card(raw_name),
        ),
        amount=amount,
        amount_formatted=format_money(amount, currency, config.locale),
        raw_name=raw_name,
        **compact(
            type=first_text(entry.get("payment_type"), entry.get("payment_method_type")),
        ),
    )


def build_tax_line(entry: dict[str, Any], currency: str, config: TransformConfig) -> TaxLine:
    amount = extract_tax_amount(entry.get("amount"))
    return TaxLine.model_construct(
        **compact(title=first_text(entry.get("title")), type=extract_tax_type(entry)),
        amount=amount,
        amount_formatted=format_money(amount, currency, config.locale),
    )


def build_loyalty_programs(payload: dict[str, Any]) -> list[LoyaltyProgram]:
    programs = []
    for entry in get_list(payload, "loyalty"):
        if not isinstance(entry, dict):
            continue
        program = first_text(entry.get("title"))
        masked_id = extract_loyalty_id(entry.get("description"))
        if program or masked_id:
            programs.append(
                LoyaltyProgram.model_construct(
                    **compact(program=program, masked_id=masked_id or None)
                )
            )
    return programs


def transform_receipt(
    raw: Any,
    schema_version: str | None = None,
    run_id: str | None = None,
    config: TransformConfig | None = None,
) -> Receipt:
    """Transform a raw receipt API payload into a normalized Receipt.

    Missing or malformed upstream fields degrade to documented defaults; this
    function does not raise for bad input. Apart from ``meta.fetchedAtISO``,
    the output is identical for identical input and schema version.

    Args:
        raw: Decoded JSON payload from the receipt API.
        schema_version: Override for the stamped schema version.
        run_id: Caller correlation id, stored in ``meta.runId``.
        config: Transform configuration (defaults to TransformConfig()).

    Returns:
        The assembled Receipt.

    Example:
        ```python
        receipt = transform_receipt(payload, run_id="batch-7")
        print(receipt.totals.total_formatted)
        ```
    """
    config = config or TransformConfig()
    payload: dict[str, Any] = raw if isinstance(raw, dict) else {}
    payload_currency = payload.get("currency_code")

    items = [
        build_item(entry, payload_currency, config)
        for entry in get_list(payload, "basket_items")
        if isinstance(entry, dict)
    ]
    aggregated_items = aggregate_items(items, config.locale)

    currency = resolve_currency(
        payload_currency,
        items[0].currency if items else None,
        default=config.default_currency,
    )

    def fmt(amount: float) -> str:
        return format_money(amount, currency, config.locale)

    tax_lines = [
        build_tax_line(entry, currency, config)
        for entry in get_list(payload, "tax_details")
        if isinstance(entry, dict)
    ]
    payments = [
        build_payment(entry, currency, config)
        for entry in get_list(payload, "payments")
        if isinstance(entry, dict)
    ]

    # Totals
    total = round2(payload["total_price"]) if is_number(payload.get("total_price")) else 0.0
    tax_total = round2(payload["total_tax"]) if is_number(payload.get("total_tax")) else None
    subtotal = round2(total - tax_total) if tax_total is not None else None
    item_count = as_count(payload.get("item_count"))
    if item_count is None and config.item_count_fallback:
        item_count = len(items)
    total_paid = round2(sum(payment.amount for payment in payments))

    totals = ReceiptTotals.model_construct(
        currency=currency,
        total=total,
        total_formatted=fmt(total),
        **compact(
            subtotal=subtotal,
            subtotal_formatted=fmt(subtotal) if subtotal is not None else None,
            tax_total=tax_total,
            tax_total_formatted=fmt(tax_total) if tax_total is not None else None,
        ),
        discount_total=extract_discount_total(payload.get("total_discount")),
        **compact(item_count=item_count),
        computed_item_quantity=sum(item.quantity for item in items),
        taxes=tax_lines,
    )

    raw_hash = compute_raw_hash(raw)
    meta = ReceiptMeta.model_construct(
        schema_version=schema_version or SCHEMA_VERSION,
        transform_version=TRANSFORM_VERSION,
        source=SOURCE,
        fetched_at_iso=_now_iso(),
        **compact(
            raw_hash=raw_hash,
            receipt_id=compute_receipt_id(raw, raw_hash),
            run_id=run_id,
        ),
    )

    loyalty_programs = build_loyalty_programs(payload)
    receipt = Receipt.model_construct(
        meta=meta,
        identities=extract_identities(payload),
        timestamps=extract_timestamps(payload),
        merchant=extract_merchant(payload),
        totals=totals,
        items=items,
        aggregated_items=aggregated_items,
        payments=payments,
        payment_summary=PaymentSummary.model_construct(
            total_paid=total_paid,
            total_paid_formatted=fmt(total_paid),
            methods=list(dict.fromkeys(p.method for p in payments if p.method)),
        ),
        **compact(
            payment_card_meta=parse_payment_slip(payload.get("raw_payment_data")),
            returns_policy=extract_returns_policy(payload),
            loyalty_programs=loyalty_programs or None,
        ),
    )

    logger.debug(
        "Assembled receipt %s: %d items, %d aggregated, %d payments",
        meta.receipt_id,
        len(items),
        len(aggregated_items),
        len(payments),
    )
    return receipt
