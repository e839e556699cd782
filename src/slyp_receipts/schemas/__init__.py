"""Normalized receipt record models and JSON schema emission."""

from slyp_receipts.schemas.receipt import (
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

__all__ = [
    "SCHEMA_VERSION",
    # Records
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
    # JSON schema
    "receipt_json_schema",
    "write_json_schema",
]
