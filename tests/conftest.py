"""Shared fixtures for slyp-receipts tests."""

import copy
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Synthetic payload: two lines sharing an identity key, three payment methods,
# totals consistent with the basket.
BASE_PAYLOAD: dict[str, Any] = {
    "currency_code": "AUD",
    "external_id": "R-X-synthetic-0001",
    "receipt_type": "purchase",
    "is_tax_invoice": True,
    "order_number_detail": {"value": "ORD-77"},
    "issued_at": 1759464922,
    "issued_at_iso": "2025-10-03T04:15:22.000Z",
    "basket_items": [
        {
            "product": {
                "name": "Dup Item",
                "pricing": {"price": 5.00, "currency_code": "AUD", "discount": 0.5},
                "quantity_purchased": 1,
                "item_properties": [{"title": "SKU: D-01"}],
            }
        },
        {
            "product": {
                "name": "Dup Item",
                "pricing": {"price": 5.00, "currency_code": "AUD"},
                "quantity_purchased": 2,
                "item_properties": [{"title": "SKU: D-01"}],
            }
        },
        {
            "product": {
                "name": "Apple Pay Thing",
                "pricing": {"price": 2.00, "currency_code": "AUD"},
                "quantity_purchased": 1,
            }
        },
    ],
    "payments": [
        {"name": "MASTERCARD (**** 2222)", "amount": 8.50, "payment_method_type": "MASTERCARD"},
        {
            "name": "AMERICAN EXPRESS (**** 3333)",
            "amount": 5.50,
            "payment_method_type": "AMERICAN EXPRESS",
        },
        {"name": "Apple Pay (**** 4444)", "amount": 3.00, "payment_method_type": "APPLE PAY"},
    ],
    "total_price": 17.00,
    "total_tax": 1.55,
    "tax_details": [{"title": "GST", "amount": {"price": 1.55, "tax_type": "GST"}}],
    "merchant_detail": {
        "name": "Synthetic Store Sydney",
        "phone_number": "0299912345",
        "abn": "12 999 888 777",
        "timezone": "Australia/Sydney",
        "address": {
            "street": "1 George St",
            "suburb": "Sydney",
            "state": "NSW",
            "postcode": "2000",
            "country_code": "AU",
        },
    },
    "root_merchant": {"trading_name": "Synthetic Merchant"},
    "raw_payment_data": (
        "MERCHANT ID: 12345\nTERMINAL ID: T987\nSTAN: 555\nRRN: 999\n"
        "AUTH: OK123\nACCT TYPE: CREDIT\nTRANS TYPE: PURCHASE"
    ),
    "total_discount": 1.25,
}


@pytest.fixture
def build_api() -> Callable[..., dict[str, Any]]:
    """Factory returning a fresh synthetic payload with top-level overrides."""

    def _build(**overrides: Any) -> dict[str, Any]:
        payload = copy.deepcopy(BASE_PAYLOAD)
        payload.update(overrides)
        return payload

    return _build


@pytest.fixture
def api_payload(build_api: Callable[..., dict[str, Any]]) -> dict[str, Any]:
    """The synthetic payload without overrides."""
    return build_api()


def _load(name: str) -> dict[str, Any]:
    return json.loads((FIXTURES_DIR / name).read_text(encoding="utf-8"))


@pytest.fixture
def sample_receipt() -> dict[str, Any]:
    """Two identical basket lines paid by one card."""
    return _load("sample_receipt.json")


@pytest.fixture
def kmart_receipt() -> dict[str, Any]:
    """Realistic department store receipt payload."""
    return _load("kmart_receipt.json")
