"""Type definitions for receipt validation reports."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class IntegritySums(BaseModel):
    """Recomputed sums the integrity checks compare against."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    sum_line_totals: float = Field(description="Rounded sum of items[].lineTotal")
    aggregated_sum: float = Field(description="Rounded sum of aggregatedItems[].lineTotal")
    total_paid: float = Field(description="Rounded sum of payments[].amount")
    total: float = Field(description="totals.total")
    subtotal: float | None = Field(default=None, description="totals.subtotal")
    tax_total: float | None = Field(default=None, description="totals.taxTotal")


class ValidationReport(BaseModel):
    """Outcome of validating an assembled receipt.

    ``validation_success`` reflects structural validity only; a structurally
    valid receipt can still carry integrity issues.

    Example:
        ```python
        report = validate_receipt(receipt)
        if not report.validation_success or report.issues:
            print("\\n".join(report.issues))
        ```
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    validation_success: bool = Field(description="Whether the receipt matches the schema")
    issues: list[str] = Field(
        default_factory=list,
        description="Structural issues followed by integrity issues",
    )
    sums: IntegritySums = Field(description="Recomputed sums used by integrity checks")

    @property
    def is_clean(self) -> bool:
        """True when the receipt is structurally valid and has no issues."""
        return self.validation_success and not self.issues

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
