"""Transform, validate and redact raw receipt payloads in one call."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field, model_validator

from slyp_receipts.core.config import ProcessingConfig
from slyp_receipts.core.transform import transform_receipt
from slyp_receipts.redaction.redactor import redact_receipt
from slyp_receipts.schemas.receipt import Receipt
from slyp_receipts.validation.types import ValidationReport
from slyp_receipts.validation.validator import validate_receipt

VALIDATION_FAILED = "validation_failed"

logger = logging.getLogger(__name__)


class ProcessingResult(BaseModel):
    """Result of processing one raw payload.

    The receipt and report are always present; ``success`` is False only when
    strict mode rejected the receipt.
    """

    receipt: Receipt = Field(description="The assembled receipt")
    validation: ValidationReport = Field(description="Structural and integrity report")
    success: bool = Field(default=True, description="Whether the receipt was accepted")
    error: str | None = Field(default=None, description="Reason the receipt was rejected")
    redacted: bool = Field(default=False, description="Whether redaction ran")

    @model_validator(mode="after")
    def _validate_error_presence(self) -> ProcessingResult:
        """Ensure a rejected result carries a reason."""
        if not self.success and not self.error:
            raise ValueError("error must be provided when success is False")
        return self

    @property
    def issues(self) -> list[str]:
        return self.validation.issues

    def summary(self) -> dict[str, Any]:
        """Compact per-receipt entry for batch manifests."""
        entry: dict[str, Any] = {
            "ok": self.success,
            "receiptId": self.receipt.meta.receipt_id,
            "total": self.receipt.totals.total,
            "items": len(self.receipt.items),
        }
        if self.error:
            entry["reason"] = self.error
            entry["issues"] = self.issues
        return entry


class ReceiptProcessor:
    """Run the transform, validate and (optionally) redact steps.

    Data-quality issues never raise; in strict mode they mark the result as
    failed. A PII violation during enforced redaction propagates.

    Example:
        ```python
        processor = ReceiptProcessor(ProcessingConfig(strict=True, redact=True))
        result = processor.process(payload, run_id="run-42")
        if not result.success:
            print(result.error, result.issues)
        ```
    """

    def __init__(self, config: ProcessingConfig | None = None) -> None:
        self.config = config or ProcessingConfig()

    def process(self, raw: Any, run_id: str | None = None) -> ProcessingResult:
        """Process one raw payload.

        Args:
            raw: Decoded receipt API payload.
            run_id: Correlation id stored in ``meta.runId``.

        Returns:
            ProcessingResult with the receipt and its validation report.

        Raises:
            PIIViolationError: If enforced redaction finds unmasked data.
        """
        config = self.config
        receipt = transform_receipt(
            raw,
            schema_version=config.schema_version,
            run_id=run_id,
            config=config.transform,
        )
        report = validate_receipt(receipt, tolerance=config.tolerance)

        error = None
        if config.strict and not report.is_clean:
            error = VALIDATION_FAILED
            logger.warning(
                "Receipt %s failed strict validation: %s",
                receipt.meta.receipt_id,
                "; ".join(report.issues),
            )

        if config.redact:
            redact_receipt(receipt, enforce=config.enforce_redaction, config=config.redaction)

        logger.info(
            "Processed receipt %s: total=%s items=%d issues=%d",
            receipt.meta.receipt_id,
            receipt.totals.total_formatted,
            len(receipt.items),
            len(report.issues),
        )
        return ProcessingResult(
            receipt=receipt,
            validation=report,
            success=error is None,
            error=error,
            redacted=config.redact,
        )

    def process_many(
        self, payloads: list[Any], run_id: str | None = None
    ) -> list[ProcessingResult]:
        """Process payloads sequentially, in order."""
        return [self.process(raw, run_id=run_id) for raw in payloads]
