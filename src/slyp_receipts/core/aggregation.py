"""Collapse basket lines that describe the same purchased item."""

from __future__ import annotations

from collections.abc import Hashable, Sequence

from slyp_receipts.extractors.money import DEFAULT_LOCALE, format_money, round2
from slyp_receipts.schemas.receipt import AggregatedItem, ReceiptItem


def identity_key(item: ReceiptItem) -> tuple[Hashable, ...]:
    """Key deciding whether two lines are the same item.

    Per-line discount and tax are not part of the key.
    """
    return (
        item.name,
        item.sku,
        item.apn,
        item.colour,
        item.size,
        item.unit_price,
        item.currency,
    )


def aggregate_items(
    items: Sequence[ReceiptItem],
    locale: str = DEFAULT_LOCALE,
) -> list[AggregatedItem]:
    """Merge items sharing an identity key.

    Quantities and line totals are summed, the line total being re-rounded
    after every merge. The first item of each key supplies the other fields,
    and output order is the first-seen order of each key. Input items are not
    modified.

    Args:
        items: Normalized basket lines in upstream order.
        locale: Babel locale for the re-formatted line totals.

    Returns:
        One AggregatedItem per distinct key.
    """
    merged: dict[tuple[Hashable, ...], AggregatedItem] = {}

    for item in items:
        key = identity_key(item)
        existing = merged.get(key)
        if existing is None:
            fields = {name: getattr(item, name) for name in item.model_fields_set}
            merged[key] = AggregatedItem.model_construct(**fields)
            continue

        existing.quantity += item.quantity
        existing.line_total = round2(existing.line_total + item.line_total)
        existing.line_total_formatted = format_money(
            existing.line_total, item.currency, locale
        )

    return list(merged.values())
