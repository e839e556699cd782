"""Write processed receipts to an output directory."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from slyp_receipts.pipeline.processor import ProcessingResult
from slyp_receipts.schemas.receipt import SCHEMA_VERSION, write_json_schema

MANIFEST_FILENAME = "batch.manifest.json"


class ReceiptWriter:
    """Persist raw payloads, clean receipts and validation reports.

    Single receipts are written as ``receipt.api.raw.json``,
    ``receipt.clean.json`` and ``receipt.validation.json``; batch members get
    their 1-based index inserted (``receipt.3.clean.json``).

    Example:
        ```python
        writer = ReceiptWriter("out")
        paths = writer.write(payload, processor.process(payload))
        writer.write_schema()
        ```
    """

    def __init__(self, out_dir: str | Path, indent: int = 2) -> None:
        self.out_dir = Path(out_dir)
        self.indent = indent

    def _path(self, kind: str, index: int | None) -> Path:
        stem = "receipt" if index is None else f"receipt.{index}"
        return self.out_dir / f"{stem}.{kind}.json"

    def _dump(self, path: Path, data: Any) -> Path:
        self.out_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(data, indent=self.indent, ensure_ascii=False), encoding="utf-8"
        )
        return path

    def write(
        self,
        raw: Any,
        result: ProcessingResult,
        index: int | None = None,
    ) -> dict[str, Path]:
        """Write the raw payload, clean receipt and validation report.

        Returns:
            Mapping of ``raw``/``clean``/``validation`` to the written paths.
        """
        return {
            "raw": self._dump(self._path("api.raw", index), raw),
            "clean": self._dump(self._path("clean", index), result.receipt.to_dict()),
            "validation": self._dump(self._path("validation", index), result.validation.to_dict()),
        }

    def write_schema(self, version: str = SCHEMA_VERSION) -> Path:
        """Write the receipt JSON schema document."""
        return write_json_schema(self.out_dir, version)

    def write_manifest(self, results: list[ProcessingResult]) -> Path:
        """Write ``batch.manifest.json`` summarizing a batch run."""
        ok = sum(1 for result in results if result.success)
        now = datetime.now(timezone.utc)
        manifest = {
            "ts": now.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "count": len(results),
            "ok": ok,
            "failed": len(results) - ok,
            "results": [result.summary() for result in results],
        }
        return self._dump(self.out_dir / MANIFEST_FILENAME, manifest)
