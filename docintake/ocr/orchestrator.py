"""OCR backend selection with remote-to-local fallback.

Handwritten document types go to the remote read service first; everything
else goes straight to local Tesseract. Each backend call is captured as an
``OcrAttempt`` so the fallback decision is a plain inspection of the first
attempt rather than exception control flow.
"""

from dataclasses import dataclass
from typing import Protocol

from docintake.classification.document_types import DocumentType
from docintake.classification.type_detector import DocumentTypeDetector
from docintake.utils.logger import get_logger

logger = get_logger(__name__)

OCR_ERROR_MARKER = "Error during OCR"

REMOTE_SERVICE_NAME = "Azure Document Analysis"
LOCAL_SERVICE_NAME = "Tesseract OCR"

HANDWRITTEN_DOCUMENT_TYPES: frozenset[DocumentType] = frozenset(
    {DocumentType.FORMULAIRE_AGREGE_OM, DocumentType.UNKNOWN}
)


class OcrBackend(Protocol):
    name: str

    def extract_text(self, file_bytes: bytes, is_pdf: bool) -> str: ...


@dataclass
class OcrAttempt:
    """Result of one backend call."""

    engine: str
    text: str = ""
    error: str | None = None

    @property
    def usable(self) -> bool:
        return self.error is None and bool(self.text.strip()) and not is_ocr_error(self.text)


@dataclass
class OcrOutcome:
    """Final OCR text together with how it was produced."""

    text: str
    engine: str
    document_type: DocumentType
    fell_back: bool = False


def is_ocr_error(text: str | None) -> bool:
    """Return ``True`` for sentinel strings produced by failed OCR."""
    return bool(text) and text.lstrip().startswith(OCR_ERROR_MARKER)


def error_sentinel(engine: str, reason: str) -> str:
    return f"{OCR_ERROR_MARKER} ({engine}): {reason}"


def is_handwritten_document_type(document_type: DocumentType) -> bool:
    return document_type in HANDWRITTEN_DOCUMENT_TYPES


def should_use_remote_ocr(document_type: DocumentType) -> bool:
    """Route handwritten and unclassified documents to the remote service."""
    use_remote = is_handwritten_document_type(document_type)
    logger.debug("Document type %s requires remote OCR: %s", document_type, use_remote)
    return use_remote


def get_recommended_ocr_service(document_type: DocumentType) -> str:
    return REMOTE_SERVICE_NAME if should_use_remote_ocr(document_type) else LOCAL_SERVICE_NAME


def attempt(backend: OcrBackend, file_bytes: bytes, is_pdf: bool) -> OcrAttempt:
    """Call a backend, capturing any failure on the attempt."""
    try:
        text = backend.extract_text(file_bytes, is_pdf)
    except Exception as exc:
        logger.error("%s OCR failed: %s", backend.name, exc)
        return OcrAttempt(engine=backend.name, error=str(exc) or type(exc).__name__)
    return OcrAttempt(engine=backend.name, text=text or "")


class OcrOrchestrator:
    """Chooses the OCR backend for a document and falls back when needed.

    Args:
        local_backend: Tesseract-based backend, always available.
        remote_backend: Remote read service. ``None`` disables remote OCR and
            every document goes to the local backend.
        detector: Filename classifier used when no type is supplied.
    """

    def __init__(
        self,
        local_backend: OcrBackend,
        remote_backend: OcrBackend | None = None,
        detector: DocumentTypeDetector | None = None,
    ) -> None:
        self.local_backend = local_backend
        self.remote_backend = remote_backend
        self.detector = detector or DocumentTypeDetector()

    def uses_remote_ocr(self, document_type: DocumentType) -> bool:
        """Whether ``run`` tries the remote backend first for this type."""
        return self.remote_backend is not None and should_use_remote_ocr(document_type)

    def recommended_service(self, document_type: DocumentType) -> str:
        """Name of the OCR service this orchestrator routes the type to."""
        return REMOTE_SERVICE_NAME if self.uses_remote_ocr(document_type) else LOCAL_SERVICE_NAME

    def process_document_and_extract_text(
        self, file_bytes: bytes, file_name: str, is_pdf: bool
    ) -> str:
        """Classify from the filename, then run OCR."""
        return self.run(file_bytes, file_name, is_pdf).text

    def process_document_with_specific_type(
        self,
        file_bytes: bytes,
        file_name: str,
        is_pdf: bool,
        document_type: DocumentType,
    ) -> str:
        """Run OCR routed by a caller-supplied document type."""
        return self.run(file_bytes, file_name, is_pdf, document_type).text

    def run(
        self,
        file_bytes: bytes,
        file_name: str,
        is_pdf: bool,
        document_type: DocumentType | None = None,
    ) -> OcrOutcome:
        """Run OCR and report which backend produced the text.

        Never raises for backend failures: a failed local attempt yields an
        ``Error during OCR (...)`` sentinel as the outcome text.
        """
        if document_type is None:
            document_type = self.detector.detect_document_type(file_name)
            logger.info("Detected document type %s for file %s", document_type, file_name)
        else:
            logger.info("Processing %s with specified document type %s", file_name, document_type)

        use_remote = self.uses_remote_ocr(document_type)
        fell_back = False

        if use_remote:
            logger.info(
                "Starting remote OCR for %s (%d bytes)", file_name, len(file_bytes)
            )
            remote = attempt(self.remote_backend, file_bytes, is_pdf)
            if remote.usable:
                logger.info(
                    "Remote OCR completed for %s, %d characters",
                    file_name,
                    len(remote.text.strip()),
                )
                return OcrOutcome(remote.text, remote.engine, document_type)
            logger.warning(
                "Remote OCR returned no usable text for %s (%s), falling back to %s",
                file_name,
                remote.error or "blank result",
                self.local_backend.name,
            )
            fell_back = True

        logger.info("Starting local OCR for %s (%d bytes)", file_name, len(file_bytes))
        local = attempt(self.local_backend, file_bytes, is_pdf)
        if local.error is not None:
            text = error_sentinel(local.engine, local.error)
        else:
            text = local.text
        return OcrOutcome(text, local.engine, document_type, fell_back=fell_back)
