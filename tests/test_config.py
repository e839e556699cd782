"""Tests for configuration classes."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from slyp_receipts import ConfigurationError
from slyp_receipts.core.config import ProcessingConfig, RedactionConfig, TransformConfig


class TestTransformConfig:
    """Tests for TransformConfig class."""

    def test_default_config(self) -> None:
        config = TransformConfig()

        assert config.default_currency == "AUD"
        assert config.locale == "en_AU"
        assert config.item_count_fallback is True

    def test_currency_upper_cased(self) -> None:
        assert TransformConfig(default_currency="nzd").default_currency == "NZD"

    def test_currency_length(self) -> None:
        with pytest.raises(ValidationError):
            TransformConfig(default_currency="DOLLARS")

    def test_unknown_locale(self) -> None:
        with pytest.raises(ValidationError):
            TransformConfig(locale="zz_ZZ")


class TestRedactionConfig:
    """Tests for RedactionConfig class."""

    def test_default_config(self) -> None:
        config = RedactionConfig()

        assert config.min_digits == 6
        assert config.mask_prefix == "***"
        assert config.visible_digits == 4

    def test_bounds(self) -> None:
        with pytest.raises(ValidationError):
            RedactionConfig(min_digits=3)
        with pytest.raises(ValidationError):
            RedactionConfig(visible_digits=5)
        with pytest.raises(ValidationError):
            RedactionConfig(mask_prefix="")


class TestProcessingConfig:
    """Tests for ProcessingConfig class."""

    def test_default_config(self) -> None:
        config = ProcessingConfig()

        assert config.tolerance == 0.01
        assert config.strict is False
        assert config.redact is False
        assert config.enforce_redaction is False
        assert config.schema_version is None
        assert isinstance(config.transform, TransformConfig)

    def test_negative_tolerance(self) -> None:
        with pytest.raises(ValidationError):
            ProcessingConfig(tolerance=-0.1)

    def test_from_dict(self) -> None:
        config = ProcessingConfig.from_dict(
            {"strict": True, "redaction": {"min_digits": 8}, "transform": {"locale": "en_NZ"}}
        )

        assert config.strict is True
        assert config.redaction.min_digits == 8
        assert config.transform.locale == "en_NZ"

    def test_from_dict_invalid(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            ProcessingConfig.from_dict({"tolerance": -1})

    def test_from_dict_not_a_mapping(self) -> None:
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            ProcessingConfig.from_dict(["strict"])  # type: ignore[arg-type]

    def test_from_yaml_string(self) -> None:
        config = ProcessingConfig.from_yaml(
            "strict: true\nredact: true\ntransform:\n  default_currency: nzd\n"
        )

        assert config.strict is True
        assert config.redact is True
        assert config.transform.default_currency == "NZD"

    def test_from_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("tolerance: 0.05\nschema_version: 2.0.0\n")

        assert ProcessingConfig.from_yaml(path).tolerance == 0.05
        assert ProcessingConfig.from_yaml(str(path)).schema_version == "2.0.0"

    def test_from_yaml_empty(self) -> None:
        assert ProcessingConfig.from_yaml("") == ProcessingConfig()

    def test_from_yaml_malformed(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            ProcessingConfig.from_yaml("strict: [unclosed")

    def test_from_yaml_scalar(self) -> None:
        with pytest.raises(ConfigurationError):
            ProcessingConfig.from_yaml("just a string")
