"""Core receipt assembly functionality."""

from slyp_receipts.core.aggregation import aggregate_items, identity_key
from slyp_receipts.core.config import ProcessingConfig, RedactionConfig, TransformConfig
from slyp_receipts.core.exceptions import (
    ConfigurationError,
    PIIViolationError,
    SlypReceiptError,
)
from slyp_receipts.core.transform import (
    TRANSFORM_VERSION,
    compute_raw_hash,
    compute_receipt_id,
    transform_receipt,
)

__all__ = [
    "TRANSFORM_VERSION",
    "transform_receipt",
    "compute_raw_hash",
    "compute_receipt_id",
    "aggregate_items",
    "identity_key",
    "ProcessingConfig",
    "RedactionConfig",
    "TransformConfig",
    "SlypReceiptError",
    "PIIViolationError",
    "ConfigurationError",
]
