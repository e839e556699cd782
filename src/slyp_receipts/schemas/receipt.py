"""Normalized receipt schema.

Pydantic models describing the normalized ``Receipt`` record. The same models
serve as the structural schema that assembled receipts are validated against
and as the source of the emitted JSON schema document.

Attributes are snake_case in Python; serialized documents use the camelCase
aliases (``unitPriceFormatted``, ``fetchedAtISO``, ...).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SCHEMA_VERSION = "1.0.0"
SCHEMA_ID_TEMPLATE = "https://schemas.local/receipt/{version}/receipt.schema.json"
SCHEMA_FILENAME = "receipt.schema.json"


class ReceiptModel(BaseModel):
    """Base class for all receipt records."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        strict=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialize by alias, omitting fields that were never set."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True, warnings=False)


class StoreAddress(ReceiptModel):
    """Store address with a derived single-line form."""

    street: str | None = Field(default=None, description="Street line")
    street2: str | None = Field(default=None, description="Second street line (shop, level)")
    suburb: str | None = Field(default=None, description="Suburb or city")
    state: str | None = Field(default=None, description="State or territory code")
    postcode: str | None = Field(default=None, description="Postcode")
    country_code: str | None = Field(default=None, description="ISO country code")
    full: str | None = Field(
        default=None,
        description="Present street, street2, suburb, state and postcode joined by ', '",
    )


class ReceiptItem(ReceiptModel):
    """A single basket line."""

    name: str = Field(description="Product name")
    sku: str | None = Field(default=None, description="Retailer stock keeping unit")
    apn: str | None = Field(default=None, description="Barcode (APN/EAN)")
    colour: str | None = Field(default=None, description="Colour variant")
    size: str | None = Field(default=None, description="Size variant")
    unit_price: float = Field(description="Price per unit, rounded to 2 decimals")
    unit_price_formatted: str = Field(description="Unit price in locale currency format")
    quantity: int = Field(gt=0, description="Quantity purchased")
    line_total: float = Field(description="unitPrice * quantity, rounded to 2 decimals")
    line_total_formatted: str = Field(description="Line total in locale currency format")
    discount: float | None = Field(default=None, description="Discount applied to the line")
    tax: float | None = Field(default=None, description="Tax included in the line")
    currency: str = Field(description="ISO 4217 currency code")


class AggregatedItem(ReceiptItem):
    """Basket lines collapsed by identity key."""

    pass


class TaxLine(ReceiptModel):
    title: str | None = Field(default=None, description="Tax line label, e.g. GST")
    type: str | None = Field(default=None, description="Tax type code")
    amount: float = Field(description="Tax amount")
    amount_formatted: str = Field(description="Tax amount in locale currency format")


class PaymentDetail(ReceiptModel):
    method: str | None = Field(
        default=None, description="Normalized payment method, e.g. VISA or APPLE_PAY"
    )
    masked_card: str | None = Field(default=None, description="Masked card number")
    amount: float = Field(description="Amount paid with this method")
    amount_formatted: str = Field(description="Amount in locale currency format")
    raw_name: str | None = Field(default=None, description="Payment descriptor as received")
    type: str | None = Field(default=None, description="Upstream payment type")


class PaymentSummary(ReceiptModel):
    total_paid: float = Field(description="Sum of all payment amounts")
    total_paid_formatted: str = Field(description="Total paid in locale currency format")
    methods: list[str] = Field(description="Distinct payment methods in first-seen order")


class PaymentCardMeta(ReceiptModel):
    """Fields parsed from the terminal payment slip."""

    merchant_id: str | None = Field(default=None, description="Acquirer merchant id")
    terminal_id: str | None = Field(default=None, description="Payment terminal id")
    stan: str | None = Field(default=None, description="System trace audit number")
    rrn: str | None = Field(default=None, description="Retrieval reference number")
    auth_code: str | None = Field(default=None, description="Authorization code")
    account_type: str | None = Field(default=None, description="Account type, e.g. CREDIT")
    transaction_type: str | None = Field(default=None, description="Transaction type")
    raw_text: str | None = Field(default=None, description="Slip text as received")


class ReturnsPolicy(ReceiptModel):
    barcode: str | None = Field(default=None, description="Barcode to present for returns")
    period_days: float | None = Field(default=None, description="Return period in days")
    policy_text: str | None = Field(default=None, description="Returns policy wording")


class LoyaltyProgram(ReceiptModel):
    program: str | None = Field(default=None, description="Loyalty program name")
    masked_id: str | None = Field(default=None, description="Masked member id")


class ReceiptTotals(ReceiptModel):
    """Receipt-level money totals."""

    currency: str = Field(description="ISO 4217 currency code of the receipt")
    total: float = Field(description="Total amount, rounded to 2 decimals")
    total_formatted: str = Field(description="Total in locale currency format")
    subtotal: float | None = Field(
        default=None, description="Total less tax; present only when tax is known"
    )
    subtotal_formatted: str | None = Field(
        default=None, description="Subtotal in locale currency format"
    )
    tax_total: float | None = Field(default=None, description="Total tax amount")
    tax_total_formatted: str | None = Field(
        default=None, description="Tax total in locale currency format"
    )
    discount_total: float | None = Field(
        default=None,
        description="Upstream discount total; null when unknown or none",
    )
    item_count: int | None = Field(default=None, ge=0, description="Number of basket lines")
    computed_item_quantity: int | None = Field(
        default=None, ge=0, description="Sum of item quantities"
    )
    taxes: list[TaxLine] = Field(description="Individual tax lines")


class ReceiptIdentities(ReceiptModel):
    external_receipt_id: str | None = Field(default=None, description="Upstream receipt id")
    order_number: str | None = Field(default=None, description="Order number")
    receipt_type: str | None = Field(default=None, description="Upstream receipt type")
    is_tax_invoice: bool | None = Field(default=None, description="Whether it is a tax invoice")


class ReceiptTimestamps(ReceiptModel):
    issued_at_epoch: float | None = Field(
        default=None, description="Issue time as Unix epoch seconds"
    )
    issued_at_iso: str | None = Field(
        default=None, alias="issuedAtISO", description="Issue time as received (ISO 8601)"
    )
    issued_date: str | None = Field(default=None, description="Issue date in UTC (YYYY-MM-DD)")
    issued_time: str | None = Field(default=None, description="Issue time in UTC (HH:MM)")
    timezone: str | None = Field(default=None, description="Store IANA timezone")


class MerchantInfo(ReceiptModel):
    merchant_name: str | None = Field(default=None, description="Trading name of the merchant")
    store_name: str | None = Field(default=None, description="Name of the store")
    abn: str | None = Field(default=None, description="Australian Business Number")
    phone: str | None = Field(default=None, description="Store phone number")
    address: StoreAddress | None = Field(default=None, description="Store address")


class ReceiptMeta(ReceiptModel):
    """Provenance stamped onto every assembled receipt."""

    schema_version: str = Field(description="Receipt schema version")
    transform_version: str | None = Field(
        default=None, description="Version of the transform that built the record"
    )
    source: Literal["slyp"] = Field(description="Upstream data source")
    fetched_at_iso: str = Field(alias="fetchedAtISO", description="Assembly time (ISO 8601 UTC)")
    raw_hash: str | None = Field(default=None, description="SHA-256 of the raw payload")
    receipt_id: str | None = Field(default=None, description="Stable receipt UUID")
    run_id: str | None = Field(default=None, description="Caller correlation id")


class Receipt(ReceiptModel):
    """Normalized purchase receipt.

    Example:
        ```python
        from slyp_receipts import transform_receipt, validate_receipt

        receipt = transform_receipt(api_payload)
        report = validate_receipt(receipt)
        print(receipt.totals.total, report.issues)
        ```
    """

    meta: ReceiptMeta = Field(description="Provenance of the record")
    identities: ReceiptIdentities = Field(description="Receipt identifiers")
    timestamps: ReceiptTimestamps = Field(description="Issue time")
    merchant: MerchantInfo = Field(description="Merchant and store details")
    totals: ReceiptTotals = Field(description="Money totals")
    items: list[ReceiptItem] = Field(description="Basket lines in upstream order")
    aggregated_items: list[AggregatedItem] = Field(
        description="Basket lines merged by identity, in first-seen order"
    )
    payments: list[PaymentDetail] = Field(description="Payments in upstream order")
    payment_summary: PaymentSummary = Field(description="Payment totals and methods")
    payment_card_meta: PaymentCardMeta | None = Field(
        default=None, description="Terminal slip details"
    )
    returns_policy: ReturnsPolicy | None = Field(default=None, description="Returns policy")
    loyalty_programs: list[LoyaltyProgram] | None = Field(
        default=None, description="Loyalty programs on the receipt"
    )
    notes: list[str] | None = Field(default=None, description="Free-text notes")


def receipt_json_schema(version: str = SCHEMA_VERSION) -> dict[str, Any]:
    """Build the JSON schema document for ``Receipt``.

    The schema version is embedded in the ``$id`` so consumers can validate
    documents without importing this package.
    """
    schema: dict[str, Any] = {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "$id": SCHEMA_ID_TEMPLATE.format(version=version),
    }
    schema.update(Receipt.model_json_schema(by_alias=True))
    return schema


def write_json_schema(out_dir: str | Path, version: str = SCHEMA_VERSION) -> Path:
    """Write ``receipt.schema.json`` into ``out_dir`` and return its path."""
    directory = Path(out_dir)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / SCHEMA_FILENAME
    path.write_text(json.dumps(receipt_json_schema(version), indent=2), encoding="utf-8")
    return path
