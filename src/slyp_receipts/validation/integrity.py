"""Cross-field arithmetic checks for assembled receipts.

All checks run and every failure is reported; nothing here raises. Values
that are not numbers (e.g. on a structurally invalid receipt) count as 0.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from slyp_receipts.extractors.money import format_fixed2 as f2
from slyp_receipts.extractors.money import is_number, round2
from slyp_receipts.schemas.receipt import Receipt
from slyp_receipts.validation.types import IntegritySums

DEFAULT_TOLERANCE = 0.01


def _num(value: Any) -> float:
    return float(value) if is_number(value) else 0.0


def _sum(values: Iterable[Any]) -> float:
    return round2(sum(_num(value) for value in values))


def compute_sums(receipt: Receipt) -> IntegritySums:
    """Recompute the sums the integrity checks compare."""
    totals = receipt.totals
    return IntegritySums(
        sum_line_totals=_sum(item.line_total for item in receipt.items),
        aggregated_sum=_sum(item.line_total for item in receipt.aggregated_items),
        total_paid=_sum(payment.amount for payment in receipt.payments),
        total=_num(totals.total),
        subtotal=totals.subtotal if is_number(totals.subtotal) else None,
        tax_total=totals.tax_total if is_number(totals.tax_total) else None,
    )


def check_integrity(
    receipt: Receipt,
    tolerance: float = DEFAULT_TOLERANCE,
) -> tuple[list[str], IntegritySums]:
    """Run the cross-field checks on a receipt.

    Checks:
    1. sum of item line totals matches the receipt total
    2. sum of payments matches the receipt total
    3. subtotal + tax total matches the total (when both are present)
    4. itemCount matches the number of items (when itemCount is present)
    5. sum of aggregated line totals matches the sum of item line totals

    Args:
        receipt: Assembled receipt, structurally valid or not.
        tolerance: Absolute tolerance in currency units.

    Returns:
        Tuple of (issues, sums). Each issue embeds both compared values.
    """
    issues: list[str] = []
    sums = compute_sums(receipt)
    total = sums.total

    if abs(sums.sum_line_totals - total) > tolerance:
        issues.append(f"sum(lineTotals)={f2(sums.sum_line_totals)} != total={f2(total)}")

    if abs(sums.total_paid - total) > tolerance:
        issues.append(f"totalPaid={f2(sums.total_paid)} != total={f2(total)}")

    if sums.subtotal is not None and sums.tax_total is not None:
        recombined = round2(sums.subtotal + sums.tax_total)
        if abs(recombined - total) > tolerance:
            issues.append(f"subtotal + tax ({f2(recombined)}) != total ({f2(total)})")

    item_count = receipt.totals.item_count
    if item_count is not None and item_count != len(receipt.items):
        issues.append(f"itemCount={item_count} != items.length={len(receipt.items)}")

    if abs(sums.aggregated_sum - sums.sum_line_totals) > tolerance:
        issues.append(
            f"aggregatedSum={f2(sums.aggregated_sum)} != sumLineTotals={f2(sums.sum_line_totals)}"
        )

    return issues, sums
