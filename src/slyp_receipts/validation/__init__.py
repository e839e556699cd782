"""Structural and integrity validation for assembled receipts."""

from slyp_receipts.validation.integrity import check_integrity, compute_sums
from slyp_receipts.validation.types import IntegritySums, ValidationReport
from slyp_receipts.validation.validator import validate_receipt, validate_structure

__all__ = [
    "IntegritySums",
    "ValidationReport",
    "check_integrity",
    "compute_sums",
    "validate_receipt",
    "validate_structure",
]
