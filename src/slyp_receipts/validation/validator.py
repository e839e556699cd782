"""Structural validation of assembled receipts."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from slyp_receipts.schemas.receipt import Receipt
from slyp_receipts.validation.integrity import DEFAULT_TOLERANCE, check_integrity
from slyp_receipts.validation.types import ValidationReport

logger = logging.getLogger(__name__)


def format_issue(error: dict) -> str:
    """Render a pydantic error as ``"<dotted.path> - <message>"``."""
    path = ".".join(str(part) for part in error.get("loc", ()))
    return f"{path} - {error.get('msg', 'Invalid value')}"


def validate_structure(receipt: Receipt) -> tuple[bool, list[str]]:
    """Check a receipt against the declared Receipt schema.

    The receipt is serialized by alias and re-validated in strict mode, so
    values assigned after assembly are checked as well. Issue paths use the
    serialized (camelCase) field names, e.g. ``items.0.quantity``.

    Returns:
        Tuple of (success, issues).
    """
    document = receipt.model_dump_json(by_alias=True, exclude_unset=True, warnings=False)
    try:
        Receipt.model_validate_json(document, strict=True)
    except ValidationError as e:
        issues = [format_issue(error) for error in e.errors()]
        logger.debug("Receipt failed schema validation with %d issues", len(issues))
        return False, issues
    return True, []


def validate_receipt(receipt: Receipt, tolerance: float = DEFAULT_TOLERANCE) -> ValidationReport:
    """Validate a receipt structurally and arithmetically.

    Structural and integrity problems are reported as issue strings; this
    function never rejects the receipt itself.

    Args:
        receipt: Assembled receipt.
        tolerance: Absolute tolerance for integrity checks.

    Returns:
        ValidationReport with the structural flag, all issues and the sums.

    Example:
        ```python
        report = validate_receipt(transform_receipt(payload))
        assert report.validation_success
        ```
    """
    success, issues = validate_structure(receipt)
    integrity_issues, sums = check_integrity(receipt, tolerance)
    return ValidationReport(
        validation_success=success,
        issues=issues + integrity_issues,
        sums=sums,
    )
