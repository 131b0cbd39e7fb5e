"""FastAPI application for the document intake API.

Provides REST endpoints for metadata extraction (single and batch), plain
OCR text download, supported document types, and health checks.
"""

import shutil
from datetime import UTC, datetime
from pathlib import PurePath
from typing import Annotated

from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from docintake import __version__
from docintake.classification.document_types import DocumentType
from docintake.classification.type_detector import (
    get_patterns_for_document_type,
    get_supported_document_types,
)
from docintake.ocr.orchestrator import is_handwritten_document_type
from docintake.pipeline.batch import BatchItem, process_batch
from docintake.pipeline.document_pipeline import (
    DocumentPipeline,
    ExtractionOutcome,
    is_pdf_file,
)
from docintake.utils.config import AppConfig, load_config
from docintake.utils.logger import get_logger

from .schemas import (
    BatchExtractionResponse,
    BatchItemResponse,
    BatchSummary,
    DocumentTypeInfo,
    DocumentTypesResponse,
    ExtractionResponse,
    HealthResponse,
)

logger = get_logger(__name__)

app = FastAPI(
    title="Document Intake API",
    description="Classify business documents and extract type-specific metadata",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".bmp", ".tiff", ".tif", ".pdf"}


def _get_components() -> tuple[DocumentPipeline, AppConfig]:
    """Initialize and return the processing pipeline with its configuration.

    Returns:
        Tuple of (pipeline, config).
    """
    config = load_config()
    return DocumentPipeline.from_config(config), config


def _check_extension(file_name: str) -> None:
    if PurePath(file_name).suffix.lower() not in _ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail="Invalid file type. Allowed: PNG, JPG, JPEG, BMP, TIFF, PDF.",
        )


async def _read_upload(file: UploadFile, max_bytes: int) -> bytes:
    """Read and validate a single upload.

    Raises:
        HTTPException: 400 for a missing, empty, oversized or unsupported file.
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="File is required.")
    _check_extension(file.filename)
    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="File is required.")
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File size exceeds the limit ({max_bytes // (1024 * 1024)}MB).",
        )
    return content


def _to_response(outcome: ExtractionOutcome) -> ExtractionResponse:
    return ExtractionResponse.model_validate(outcome.to_dict())


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Return system health status."""
    config = load_config()
    return HealthResponse(
        status="healthy",
        version=__version__,
        tesseract_available=shutil.which("tesseract") is not None,
        remote_ocr_configured=bool(
            config.remote_ocr.enabled
            and config.remote_ocr.endpoint
            and config.remote_ocr.api_key
        ),
    )


@app.post("/metadata/extract", response_model=ExtractionResponse)
async def extract_metadata(
    file: Annotated[UploadFile, File(...)],
    document_type: Annotated[str | None, Query()] = None,
) -> ExtractionResponse:
    """Extract type-specific metadata from an uploaded document.

    Args:
        file: Uploaded document (PNG, JPG, JPEG, BMP, TIFF or PDF).
        document_type: Optional type name overriding filename detection.
            Unrecognised names are ignored.

    Returns:
        Filtered metadata with validation result and statistics.
    """
    pipeline, config = _get_components()
    content = await _read_upload(file, config.api.max_file_size_mb * 1024 * 1024)
    explicit_type = DocumentType.parse(document_type)
    if explicit_type is not None:
        logger.info("Using specified document type %s for %s", explicit_type, file.filename)

    try:
        outcome = await run_in_threadpool(
            pipeline.process_document,
            content,
            file.filename,
            is_pdf_file(file.filename),
            explicit_type,
        )
    except Exception as exc:
        logger.error("Extraction failed for %s: %s", file.filename, exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return _to_response(outcome)


@app.post("/metadata/extract-batch", response_model=BatchExtractionResponse)
async def extract_metadata_batch(
    files: Annotated[list[UploadFile], File(...)],
    document_type: Annotated[str | None, Query()] = None,
) -> BatchExtractionResponse:
    """Extract metadata from several documents concurrently.

    Oversized files are skipped; files with an unsupported type produce an
    error item. Results keep the submission order.
    """
    pipeline, config = _get_components()
    if not files:
        raise HTTPException(status_code=400, detail="At least one file is required.")
    if len(files) > config.api.max_batch_files:
        raise HTTPException(
            status_code=400,
            detail=f"Maximum {config.api.max_batch_files} files allowed per batch.",
        )

    explicit_type = DocumentType.parse(document_type)
    max_bytes = config.api.max_file_size_mb * 1024 * 1024

    slots: list[BatchItem | int] = []
    documents: list[tuple[str, bytes]] = []
    for file in files:
        file_name = file.filename or "unknown"
        content = await file.read()
        if len(content) > max_bytes:
            logger.warning("File %s exceeds size limit and will be skipped", file_name)
            continue
        if PurePath(file_name).suffix.lower() not in _ALLOWED_EXTENSIONS:
            slots.append(BatchItem(file_name=file_name, error="Invalid file type"))
            continue
        if not content:
            slots.append(BatchItem(file_name=file_name, error="File is empty"))
            continue
        slots.append(len(documents))
        documents.append((file_name, content))

    processed = await run_in_threadpool(
        process_batch, pipeline, documents, explicit_type, config.batch.max_workers
    )

    results: list[BatchItemResponse] = []
    for slot in slots:
        item = processed[slot] if isinstance(slot, int) else slot
        results.append(
            BatchItemResponse(
                file_name=item.file_name,
                success=item.succeeded,
                result=_to_response(item.outcome) if item.outcome else None,
                error=item.error,
            )
        )

    succeeded = sum(1 for r in results if r.success)
    logger.info(
        "Batch summary: %d submitted, %d processed, %d succeeded",
        len(files),
        len(results),
        succeeded,
    )
    return BatchExtractionResponse(
        results=results,
        summary=BatchSummary(
            total_files_submitted=len(files),
            files_processed=len(results),
            files_skipped=len(files) - len(results),
            processing_date=datetime.now(UTC),
        ),
    )


@app.get("/metadata/document-types", response_model=DocumentTypesResponse)
async def list_document_types() -> DocumentTypesResponse:
    """List the detectable document types and how each is processed."""
    pipeline, _ = _get_components()
    detector = pipeline.detector
    types = [
        DocumentTypeInfo(
            type=document_type.value,
            display_name=detector.get_document_type_display_name(document_type),
            patterns=get_patterns_for_document_type(document_type),
            recommended_ocr_service=pipeline.orchestrator.recommended_service(document_type),
            is_handwritten=is_handwritten_document_type(document_type),
        )
        for document_type in get_supported_document_types()
    ]
    return DocumentTypesResponse(document_types=types, total_types=len(types))


@app.post("/ocr/extract-text")
async def extract_text(file: Annotated[UploadFile, File(...)]) -> Response:
    """Run local OCR and return the text as a downloadable file."""
    pipeline, config = _get_components()
    content = await _read_upload(file, config.api.max_file_size_mb * 1024 * 1024)
    local = pipeline.orchestrator.local_backend

    try:
        text = await run_in_threadpool(
            local.extract_text, content, is_pdf_file(file.filename)
        )
    except Exception as exc:
        logger.error("OCR failed for %s: %s", file.filename, exc)
        raise HTTPException(status_code=500, detail=f"An error occurred: {exc}") from exc

    output_name = f"{PurePath(file.filename).stem}_extracted_text.txt"
    return Response(
        content=text.encode("utf-8"),
        media_type="text/plain; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{output_name}"'},
    )
