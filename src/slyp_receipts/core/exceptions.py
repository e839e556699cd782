"""Custom exceptions for slyp-receipts."""


class SlypReceiptError(Exception):
    """Base exception for all slyp-receipts errors."""

    pass


class PIIViolationError(SlypReceiptError):
    """Raised when enforced redaction still finds unmasked sensitive data."""

    def __init__(self, message: str, violations: list[str] | None = None) -> None:
        super().__init__(message)
        self.violations = violations or []


class ConfigurationError(SlypReceiptError):
    """Raised when processing configuration is invalid."""

    pass
