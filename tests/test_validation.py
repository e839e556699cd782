"""Tests for structural and integrity validation."""

from typing import Any

import pytest

from slyp_receipts import Receipt, transform_receipt
from slyp_receipts.validation import (
    ValidationReport,
    check_integrity,
    validate_receipt,
    validate_structure,
)


@pytest.fixture
def receipt(api_payload: dict[str, Any]) -> Receipt:
    return transform_receipt(api_payload)


class TestValidateStructure:
    """Tests for schema conformance checks."""

    def test_valid_receipt(self, receipt: Receipt) -> None:
        assert validate_structure(receipt) == (True, [])

    def test_invalid_quantity(self, receipt: Receipt) -> None:
        receipt.items[0].quantity = -5

        success, issues = validate_structure(receipt)

        assert success is False
        assert issues == ["items.0.quantity - Input should be greater than 0"]

    def test_wrong_type_uses_serialized_path(self, receipt: Receipt) -> None:
        receipt.payment_summary.total_paid = "lots"

        success, issues = validate_structure(receipt)

        assert success is False
        assert len(issues) == 1
        assert issues[0].startswith("paymentSummary.totalPaid - ")

    def test_structural_issues_come_first(self, receipt: Receipt) -> None:
        receipt.items[0].quantity = 0
        receipt.totals.item_count = 9

        report = validate_receipt(receipt)

        assert report.validation_success is False
        assert report.issues[0].startswith("items.0.quantity")
        assert report.issues[-1] == "itemCount=9 != items.length=3"


class TestIntegrity:
    """Tests for cross-field arithmetic checks."""

    def test_clean(self, receipt: Receipt) -> None:
        issues, sums = check_integrity(receipt)

        assert issues == []
        assert sums.sum_line_totals == 17.0
        assert sums.aggregated_sum == 17.0
        assert sums.total_paid == 17.0
        assert sums.subtotal == 15.45
        assert sums.tax_total == 1.55

    def test_line_totals_mismatch(self, receipt: Receipt) -> None:
        receipt.items[0].line_total = 99.0

        issues, _ = check_integrity(receipt)

        assert "sum(lineTotals)=111.00 != total=17.00" in issues
        assert "aggregatedSum=17.00 != sumLineTotals=111.00" in issues

    def test_total_paid_mismatch(self, receipt: Receipt) -> None:
        receipt.payments[0].amount = 1.0
        issues, _ = check_integrity(receipt)
        assert issues == ["totalPaid=9.50 != total=17.00"]

    def test_subtotal_plus_tax_mismatch(self, receipt: Receipt) -> None:
        receipt.totals.subtotal = 10.0
        issues, _ = check_integrity(receipt)
        assert issues == ["subtotal + tax (11.55) != total (17.00)"]

    def test_item_count_mismatch(self, receipt: Receipt) -> None:
        receipt.totals.item_count = 5
        issues, _ = check_integrity(receipt)
        assert issues == ["itemCount=5 != items.length=3"]

    def test_aggregated_sum_mismatch(self, receipt: Receipt) -> None:
        receipt.aggregated_items[0].line_total = 1.0
        issues, _ = check_integrity(receipt)
        assert issues == ["aggregatedSum=3.00 != sumLineTotals=17.00"]

    def test_tolerance(self, receipt: Receipt) -> None:
        receipt.payments[0].amount = 8.2

        default_issues, _ = check_integrity(receipt)
        loose_issues, _ = check_integrity(receipt, tolerance=0.5)

        assert default_issues == ["totalPaid=16.70 != total=17.00"]
        assert loose_issues == []

    def test_missing_tax_skips_subtotal_check(self, receipt: Receipt) -> None:
        receipt.totals.tax_total = None
        receipt.totals.subtotal = 1.0
        issues, _ = check_integrity(receipt)
        assert issues == []

    def test_all_failures_reported(self, receipt: Receipt) -> None:
        receipt.totals.total = 50.0
        receipt.totals.item_count = 1

        issues, _ = check_integrity(receipt)

        assert len(issues) == 4


class TestValidationReport:
    """Tests for the report model."""

    def test_to_dict_uses_camel_case(self, receipt: Receipt) -> None:
        data = validate_receipt(receipt).to_dict()

        assert data["validationSuccess"] is True
        assert data["issues"] == []
        assert data["sums"]["sumLineTotals"] == 17.0
        assert data["sums"]["totalPaid"] == 17.0

    def test_is_clean(self, receipt: Receipt) -> None:
        report = validate_receipt(receipt)
        dirty = ValidationReport(validation_success=True, issues=["x"], sums=report.sums)

        assert report.is_clean
        assert not dirty.is_clean
