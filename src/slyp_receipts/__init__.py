"""
slyp-receipts: normalize and validate receipts captured from the Slyp receipt API.
"""

from slyp_receipts.core.aggregation import aggregate_items
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
from slyp_receipts.pipeline import ProcessingResult, ReceiptProcessor, ReceiptWriter
from slyp_receipts.redaction import redact_receipt

# Schemas
from slyp_receipts.schemas import (
    SCHEMA_VERSION,
    AggregatedItem,
    LoyaltyProgram,
    MerchantInfo,
    PaymentCardMeta,
    PaymentDetail,
    PaymentSummary,
    Receipt,
    ReceiptIdentities,
    ReceiptItem,
    ReceiptMeta,
    ReceiptTimestamps,
    ReceiptTotals,
    ReturnsPolicy,
    StoreAddress,
    TaxLine,
    receipt_json_schema,
    write_json_schema,
)
from slyp_receipts.validation import (
    IntegritySums,
    ValidationReport,
    check_integrity,
    validate_receipt,
    validate_structure,
)

__version__ = "0.1.0"

__all__ = [
    # Versions
    "SCHEMA_VERSION",
    "TRANSFORM_VERSION",
    # Core
    "transform_receipt",
    "compute_raw_hash",
    "compute_receipt_id",
    "aggregate_items",
    "SlypReceiptError",
    "PIIViolationError",
    "ConfigurationError",
    # Config
    "TransformConfig",
    "RedactionConfig",
    "ProcessingConfig",
    # Validation
    "validate_receipt",
    "validate_structure",
    "check_integrity",
    "ValidationReport",
    "IntegritySums",
    # Redaction
    "redact_receipt",
    # Pipeline
    "ReceiptProcessor",
    "ProcessingResult",
    "ReceiptWriter",
    # Schemas
    "Receipt",
    "ReceiptMeta",
    "ReceiptIdentities",
    "ReceiptTimestamps",
    "MerchantInfo",
    "StoreAddress",
    "ReceiptTotals",
    "TaxLine",
    "ReceiptItem",
    "AggregatedItem",
    "PaymentDetail",
    "PaymentSummary",
    "PaymentCardMeta",
    "ReturnsPolicy",
    "LoyaltyProgram",
    "receipt_json_schema",
    "write_json_schema",
]
