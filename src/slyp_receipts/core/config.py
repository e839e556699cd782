"""Configuration classes for receipt processing."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from babel.core import Locale, UnknownLocaleError
from pydantic import BaseModel, Field, ValidationError, field_validator

from slyp_receipts.core.exceptions import ConfigurationError
from slyp_receipts.extractors.money import DEFAULT_CURRENCY, DEFAULT_LOCALE


class TransformConfig(BaseModel):
    """Configuration for assembling a receipt from a raw payload."""

    default_currency: str = Field(
        default=DEFAULT_CURRENCY,
        min_length=3,
        max_length=3,
        description="Currency used when neither the item nor the payload declares one",
    )
    locale: str = Field(
        default=DEFAULT_LOCALE,
        description="Babel locale used to render *Formatted money fields",
    )
    item_count_fallback: bool = Field(
        default=True,
        description="Fill totals.itemCount with len(items) when the payload has no item_count",
    )

    @field_validator("default_currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        """Normalize the currency code to upper case."""
        return v.upper()

    @field_validator("locale")
    @classmethod
    def validate_locale(cls, v: str) -> str:
        """Reject locales Babel cannot load."""
        try:
            Locale.parse(v)
        except (UnknownLocaleError, ValueError) as e:
            raise ValueError(f"Unknown locale: {v!r}") from e
        return v


class RedactionConfig(BaseModel):
    """Configuration for masking sensitive receipt fields."""

    min_digits: int = Field(
        default=6,
        ge=5,
        description="Digit count at which phone/ABN values are masked and runs count as PII",
    )
    mask_prefix: str = Field(
        default="***",
        min_length=1,
        description="Fixed prefix that replaces the hidden part of a masked value",
    )
    visible_digits: int = Field(
        default=4,
        ge=1,
        le=4,
        description="Number of trailing digits left visible after masking",
    )


class ProcessingConfig(BaseModel):
    """Configuration for the transform, validate and redact pipeline."""

    transform: TransformConfig = Field(default_factory=TransformConfig)
    redaction: RedactionConfig = Field(default_factory=RedactionConfig)

    schema_version: str | None = Field(
        default=None,
        description="Override for the schema version stamped into receipt meta",
    )
    tolerance: float = Field(
        default=0.01,
        ge=0.0,
        description="Absolute tolerance for integrity checks, in currency units",
    )
    strict: bool = Field(
        default=False,
        description="Mark results as failed when validation reports any issue",
    )
    redact: bool = Field(
        default=False,
        description="Run the redaction pass on every processed receipt",
    )
    enforce_redaction: bool = Field(
        default=False,
        description="Raise PIIViolationError when redaction leaves sensitive digits",
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProcessingConfig:
        """Create a config from a plain dictionary.

        Raises:
            ConfigurationError: If the data is not a mapping or fails validation.
        """
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration must be a mapping, got {type(data).__name__}"
            )
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @classmethod
    def from_yaml(cls, source: str | Path) -> ProcessingConfig:
        """Load a config from a YAML file or string.

        Args:
            source: YAML string or path to a YAML file.

        Returns:
            ProcessingConfig instance.
        """
        if isinstance(source, Path) or (
            isinstance(source, str) and "\n" not in source and Path(source).is_file()
        ):
            content = Path(source).read_text()
        else:
            content = source

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML configuration: {e}") from e
        return cls.from_dict(data if data is not None else {})
