"""Processing facade and output writer for receipt payloads."""

from slyp_receipts.pipeline.processor import ProcessingResult, ReceiptProcessor
from slyp_receipts.pipeline.writer import ReceiptWriter

__all__ = [
    "ProcessingResult",
    "ReceiptProcessor",
    "ReceiptWriter",
]
