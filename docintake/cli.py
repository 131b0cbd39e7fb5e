"""Command-line interface for batch document processing and CSV export.

Provides subcommands for processing folders of documents concurrently,
extracting a single document to JSON, and listing supported types.
"""

import argparse
import csv
import json
import sys
from pathlib import Path

from docintake.classification.document_types import DocumentType
from docintake.classification.type_detector import (
    get_patterns_for_document_type,
    get_supported_document_types,
)
from docintake.metadata.models import LIST_FIELDS
from docintake.pipeline.batch import BatchItem, process_batch
from docintake.pipeline.document_pipeline import DocumentPipeline
from docintake.utils.config import load_config
from docintake.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

_SUPPORTED_EXTENSIONS = ("*.png", "*.jpg", "*.jpeg", "*.bmp", "*.tiff", "*.tif", "*.pdf")
_META_COLUMNS = [
    "filename",
    "status",
    "document_type",
    "document_name",
    "ocr_service_used",
    "validation_passed",
    "validation_messages",
    "total_fields_extracted",
    "error",
]
_VALUE_SEPARATOR = "; "


def _find_documents(input_dir: Path) -> list[Path]:
    """Find all supported document files in a directory.

    Args:
        input_dir: Directory to scan for documents.

    Returns:
        Sorted list of document file paths.
    """
    files: list[Path] = []
    for ext in _SUPPORTED_EXTENSIONS:
        files.extend(input_dir.glob(ext))
        files.extend(input_dir.glob(ext.upper()))
    return sorted(set(files))


def _batch_row(item: BatchItem) -> dict[str, object]:
    """Flatten a batch item into one CSV row."""
    if item.outcome is None:
        return {"filename": item.file_name, "status": "failed", "error": item.error}

    outcome = item.outcome
    row: dict[str, object] = {
        "filename": item.file_name,
        "status": "success",
        "document_type": outcome.document_type.value,
        "document_name": outcome.metadata.document_name,
        "ocr_service_used": outcome.ocr_service_used,
        "validation_passed": outcome.validation.is_valid,
        "validation_messages": _VALUE_SEPARATOR.join(outcome.validation.messages),
        "total_fields_extracted": outcome.statistics.get("total_fields_extracted", 0),
        "error": None,
    }
    for field_name in LIST_FIELDS:
        values = outcome.metadata.get_field(field_name)
        if values:
            row[field_name] = _VALUE_SEPARATOR.join(values)
    return row


def process_folder(
    input_dir: Path,
    output_csv: Path,
    document_type: DocumentType | None = None,
    max_workers: int | None = None,
    verbose: bool = False,
    pipeline: DocumentPipeline | None = None,
) -> dict[str, int]:
    """Process all documents in a folder and export results to CSV.

    Args:
        input_dir: Directory containing document files.
        output_csv: Path for the output CSV file.
        document_type: Type applied to every file; detected per file if ``None``.
        max_workers: Worker threads; defaults to the configured value.
        verbose: Whether to print per-file progress.
        pipeline: Pre-built pipeline; built from configuration if ``None``.

    Returns:
        Summary dict with total, successful, and failed counts.
    """
    config = load_config()
    pipeline = pipeline or DocumentPipeline.from_config(config)
    workers = max_workers or config.batch.max_workers

    files = _find_documents(input_dir)
    if not files:
        logger.warning("No documents found in %s", input_dir)
        return {"total": 0, "successful": 0, "failed": 0}

    logger.info("Found %d documents to process", len(files))
    documents = [(path.name, path.read_bytes()) for path in files]
    items = process_batch(pipeline, documents, document_type, workers)

    if verbose:
        for i, item in enumerate(items, 1):
            status = "ok" if item.succeeded else f"failed: {item.error}"
            print(f"[{i}/{len(items)}] {item.file_name}: {status}")

    _write_csv([_batch_row(item) for item in items], output_csv)
    logger.info("Results written to %s", output_csv)

    successful = sum(1 for item in items if item.succeeded)
    summary = {
        "total": len(items),
        "successful": successful,
        "failed": len(items) - successful,
    }
    _print_summary(summary, output_csv)
    return summary


def _write_csv(results: list[dict[str, object]], output_path: Path) -> None:
    """Write extraction results to a CSV file.

    Args:
        results: List of result dictionaries.
        output_path: Path for the output CSV file.
    """
    if not results:
        return

    all_keys: set[str] = set()
    for r in results:
        all_keys.update(r.keys())

    field_columns = [name for name in LIST_FIELDS if name in all_keys]
    columns = [c for c in _META_COLUMNS if c in all_keys] + field_columns

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=columns, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(results)


def _print_summary(summary: dict[str, int], output_csv: Path) -> None:
    """Print batch processing summary to stdout.

    Args:
        summary: Counts of total, successful, and failed documents.
        output_csv: Path to the output CSV.
    """
    print(f"\n{'=' * 50}")
    print("Batch Processing Complete")
    print(f"{'=' * 50}")
    print(f"Total:      {summary['total']}")
    print(f"Successful: {summary['successful']}")
    print(f"Failed:     {summary['failed']}")
    print(f"Output:     {output_csv}")


def extract_single(
    file_path: Path,
    document_type: DocumentType | None = None,
    pipeline: DocumentPipeline | None = None,
) -> dict[str, object]:
    """Process a single document and return structured results.

    Args:
        file_path: Path to the document file.
        document_type: Type override; detected from the filename if ``None``.
        pipeline: Pre-built pipeline; built from configuration if ``None``.

    Returns:
        Serialized extraction outcome.
    """
    pipeline = pipeline or DocumentPipeline.from_config(load_config())
    outcome = pipeline.process_document(
        file_path.read_bytes(), file_path.name, document_type=document_type
    )
    return outcome.to_dict()


def list_types(pipeline: DocumentPipeline | None = None) -> list[dict[str, object]]:
    """Describe every detectable document type.

    Args:
        pipeline: Pre-built pipeline whose OCR routing is reported; built
            from configuration if ``None``.
    """
    pipeline = pipeline or DocumentPipeline.from_config(load_config())
    detector = pipeline.detector
    return [
        {
            "type": document_type.value,
            "display_name": detector.get_document_type_display_name(document_type),
            "patterns": get_patterns_for_document_type(document_type),
            "recommended_ocr_service": (
                pipeline.orchestrator.recommended_service(document_type)
            ),
        }
        for document_type in get_supported_document_types()
    ]


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the appropriate command.

    Args:
        argv: Command-line arguments (defaults to sys.argv).
    """
    parser = argparse.ArgumentParser(
        description="Business Document Intake",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    type_choices = [t.value for t in DocumentType]

    batch_parser = subparsers.add_parser("batch", help="Process a folder of documents")
    batch_parser.add_argument(
        "input_dir", type=Path, help="Input directory with documents"
    )
    batch_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("results.csv"),
        help="Output CSV file (default: results.csv)",
    )
    batch_parser.add_argument(
        "-t",
        "--type",
        choices=type_choices,
        default=None,
        dest="doc_type",
        help="Document type (default: detect from filename)",
    )
    batch_parser.add_argument(
        "-w", "--workers", type=int, default=None, help="Worker threads"
    )
    batch_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose output"
    )

    single_parser = subparsers.add_parser("extract", help="Process a single document")
    single_parser.add_argument("file", type=Path, help="Document file to process")
    single_parser.add_argument(
        "-t",
        "--type",
        choices=type_choices,
        default=None,
        dest="doc_type",
        help="Document type (default: detect from filename)",
    )
    single_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")

    subparsers.add_parser("types", help="List supported document types")

    args = parser.parse_args(argv)

    config = load_config()
    setup_logging(config.log_level, config.log_file)

    if args.command == "batch":
        if not args.input_dir.is_dir():
            print(f"Error: {args.input_dir} is not a directory", file=sys.stderr)
            sys.exit(1)
        process_folder(
            args.input_dir,
            args.output,
            DocumentType.parse(args.doc_type),
            args.workers,
            args.verbose,
        )
    elif args.command == "extract":
        if not args.file.exists():
            print(f"Error: {args.file} does not exist", file=sys.stderr)
            sys.exit(1)
        result = extract_single(args.file, DocumentType.parse(args.doc_type))
        output_str = json.dumps(result, indent=2, ensure_ascii=False)
        if args.output:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            args.output.write_text(output_str, encoding="utf-8")
            print(f"Output written to {args.output}")
        else:
            print(output_str)
    elif args.command == "types":
        print(json.dumps(list_types(), indent=2, ensure_ascii=False))
    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()
