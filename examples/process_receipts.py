"""Example: Normalize captured receipt API payloads and write the outputs.

Usage:
    python examples/process_receipts.py receipt.api.raw.json
    python examples/process_receipts.py captures/*.json --strict --redact

Environment (optionally from a .env file):
    SLYP_OUT_DIR   output directory (default: out)
    SLYP_CONFIG    YAML processing config
    SLYP_RUN_ID    correlation id stamped into receipt meta
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from slyp_receipts import (
    ConfigurationError,
    PIIViolationError,
    ProcessingConfig,
    ReceiptProcessor,
    ReceiptWriter,
)

# Load environment variables
load_dotenv()


def load_config(args: argparse.Namespace) -> ProcessingConfig:
    """Build the processing config from SLYP_CONFIG and command-line flags."""
    config_path = args.config or os.getenv("SLYP_CONFIG")
    config = ProcessingConfig.from_yaml(Path(config_path)) if config_path else ProcessingConfig()

    overrides = {
        "strict": args.strict or config.strict,
        "redact": args.redact or config.redact,
        "enforce_redaction": args.enforce or config.enforce_redaction,
    }
    return config.model_copy(update=overrides)


def main() -> int:
    parser = argparse.ArgumentParser(description="Normalize Slyp receipt API payloads")
    parser.add_argument("paths", nargs="+", type=Path, help="Raw receipt JSON files")
    parser.add_argument("--out", type=Path, default=None, help="Output directory")
    parser.add_argument("--config", default=None, help="YAML processing config")
    parser.add_argument("--strict", action="store_true", help="Fail receipts with issues")
    parser.add_argument("--redact", action="store_true", help="Mask merchant and card fields")
    parser.add_argument("--enforce", action="store_true", help="Abort if PII remains")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args)
    except ConfigurationError as e:
        print(f"❌ {e}")
        return 2

    processor = ReceiptProcessor(config)
    writer = ReceiptWriter(args.out or os.getenv("SLYP_OUT_DIR", "out"))
    run_id = os.getenv("SLYP_RUN_ID")
    batch = len(args.paths) > 1

    results = []
    for index, path in enumerate(args.paths, start=1):
        raw = json.loads(path.read_text(encoding="utf-8"))
        try:
            result = processor.process(raw, run_id=run_id)
        except PIIViolationError as e:
            print(f"❌ {path}: {e}")
            return 1

        writer.write(raw, result, index=index if batch else None)
        results.append(result)

        status = "✓" if result.success else "✗"
        print(f"{status} {path.name}: {result.receipt.totals.total_formatted}")
        for issue in result.issues:
            print(f"    - {issue}")

    writer.write_schema()
    if batch:
        writer.write_manifest(results)

    print(f"\nWrote outputs to {writer.out_dir}")
    return 0 if all(result.success for result in results) else 1


if __name__ == "__main__":
    sys.exit(main())
