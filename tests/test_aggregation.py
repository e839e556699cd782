"""Tests for basket line aggregation."""

from slyp_receipts.core.aggregation import aggregate_items, identity_key
from slyp_receipts.schemas.receipt import ReceiptItem


def make_item(name: str, unit_price: float, quantity: int, **extra: object) -> ReceiptItem:
    line_total = round(unit_price * quantity, 2)
    return ReceiptItem.model_construct(
        name=name,
        unit_price=unit_price,
        unit_price_formatted=f"${unit_price:.2f}",
        quantity=quantity,
        line_total=line_total,
        line_total_formatted=f"${line_total:.2f}",
        currency="AUD",
        **extra,
    )


class TestAggregateItems:
    """Tests for aggregate_items."""

    def test_same_key_is_merged(self) -> None:
        items = [make_item("Tee", 10.0, 1, sku="T-1"), make_item("Tee", 10.0, 2, sku="T-1")]

        aggregated = aggregate_items(items)

        assert len(aggregated) == 1
        assert aggregated[0].quantity == 3
        assert aggregated[0].line_total == 30.0
        assert aggregated[0].line_total_formatted == "$30.00"

    def test_first_item_supplies_other_fields(self) -> None:
        items = [
            make_item("Dup", 5.0, 1, sku="D-01", discount=0.5),
            make_item("Dup", 5.0, 2, sku="D-01", tax=0.9),
        ]

        merged = aggregate_items(items)[0]

        assert merged.discount == 0.5
        assert merged.tax is None

    def test_distinct_attributes_are_kept_apart(self) -> None:
        items = [
            make_item("Tee", 10.0, 1, size="M"),
            make_item("Tee", 10.0, 1, size="L"),
            make_item("Tee", 12.0, 1, size="M"),
        ]
        assert len(aggregate_items(items)) == 3

    def test_first_seen_order(self) -> None:
        items = [make_item("B", 1.0, 1), make_item("A", 2.0, 1), make_item("B", 1.0, 1)]
        assert [item.name for item in aggregate_items(items)] == ["B", "A"]

    def test_inputs_not_modified(self) -> None:
        items = [make_item("Tee", 10.0, 1), make_item("Tee", 10.0, 2)]

        aggregate_items(items)

        assert items[0].quantity == 1
        assert items[0].line_total == 10.0

    def test_line_total_rerounded(self) -> None:
        items = [make_item("Gum", 0.1, 1), make_item("Gum", 0.1, 1), make_item("Gum", 0.1, 1)]
        assert aggregate_items(items)[0].line_total == 0.3

    def test_empty(self) -> None:
        assert aggregate_items([]) == []

    def test_identity_key_ignores_discount(self) -> None:
        plain = make_item("Tee", 10.0, 1)
        discounted = make_item("Tee", 10.0, 1, discount=1.0)
        assert identity_key(plain) == identity_key(discounted)
