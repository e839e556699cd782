"""Masking of sensitive receipt fields."""

from slyp_receipts.redaction.redactor import find_pii, mask_card, mask_tail, redact_receipt

__all__ = [
    "find_pii",
    "mask_card",
    "mask_tail",
    "redact_receipt",
]
