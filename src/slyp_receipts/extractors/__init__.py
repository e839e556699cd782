"""Field extractors and free-text parsers for raw receipt payloads."""

from slyp_receipts.extractors.fields import (
    extract_discount_total,
    extract_quantity,
    extract_tax_amount,
    extract_unit_price,
    resolve_currency,
)
from slyp_receipts.extractors.money import format_money, round2
from slyp_receipts.extractors.parsers import (
    extract_loyalty_id,
    extract_masked_card,
    normalize_payment_method,
    parse_item_properties,
    parse_payment_slip,
)

__all__ = [
    # Money
    "round2",
    "format_money",
    # Fields
    "extract_quantity",
    "extract_unit_price",
    "resolve_currency",
    "extract_discount_total",
    "extract_tax_amount",
    # Parsers
    "parse_item_properties",
    "normalize_payment_method",
    "extract_masked_card",
    "extract_loyalty_id",
    "parse_payment_slip",
]
