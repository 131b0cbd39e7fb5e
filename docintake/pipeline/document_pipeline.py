"""End-to-end processing of one uploaded document.

Bytes go through OCR (with backend routing and fallback), then metadata
extraction, validation and statistics. Every stage failure except missing
input degrades into the returned outcome instead of raising.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import PurePath

from docintake.classification.document_types import DocumentType
from docintake.classification.type_detector import DocumentTypeDetector
from docintake.metadata.models import DocumentMetadata
from docintake.metadata.service import MetadataService, derive_document_name
from docintake.ocr.azure_client import AzureVisionOcrClient
from docintake.ocr.orchestrator import OcrOrchestrator, is_ocr_error
from docintake.ocr.pdf_handler import PDFHandler
from docintake.ocr.tesseract_engine import TesseractEngine, TesseractOcrService
from docintake.utils.config import AppConfig
from docintake.utils.logger import get_logger
from docintake.validation.metadata_filter import ValidationResult

logger = get_logger(__name__)

NO_TEXT_MESSAGE = "OCR process yielded no text."


@dataclass
class ExtractionOutcome:
    """Everything produced for one document."""

    file_name: str
    document_type: DocumentType
    metadata: DocumentMetadata
    validation: ValidationResult
    statistics: dict[str, int | bool]
    ocr_service_used: str
    processed_at: datetime

    def to_dict(self) -> dict[str, object]:
        return {
            "file_name": self.file_name,
            "document_type": self.document_type.value,
            "metadata": self.metadata.to_dict(),
            "validation_result": {
                "is_valid": self.validation.is_valid,
                "messages": list(self.validation.messages),
            },
            "extraction_statistics": dict(self.statistics),
            "ocr_service_used": self.ocr_service_used,
            "processed_at": self.processed_at.isoformat(),
        }


def is_pdf_file(file_name: str | None) -> bool:
    return bool(file_name) and PurePath(file_name).suffix.lower() == ".pdf"


class DocumentPipeline:
    """Runs OCR and metadata extraction for single documents.

    Args:
        orchestrator: OCR backend router.
        metadata_service: Text-to-metadata service.
        detector: Filename classifier.
    """

    def __init__(
        self,
        orchestrator: OcrOrchestrator,
        metadata_service: MetadataService | None = None,
        detector: DocumentTypeDetector | None = None,
    ) -> None:
        self.detector = detector or DocumentTypeDetector()
        self.orchestrator = orchestrator
        self.metadata_service = metadata_service or MetadataService(detector=self.detector)

    @classmethod
    def from_config(cls, config: AppConfig) -> "DocumentPipeline":
        """Wire the local and (when enabled) remote OCR backends from config."""
        pdf_handler = PDFHandler(dpi=config.ocr.pdf_dpi)
        local = TesseractOcrService(
            engine=TesseractEngine(
                tesseract_cmd=config.ocr.tesseract_cmd,
                default_lang=config.ocr.default_lang,
            ),
            pdf_handler=pdf_handler,
            psm=config.ocr.psm,
        )
        remote = None
        if config.remote_ocr.enabled:
            remote = AzureVisionOcrClient.from_config(config.remote_ocr, pdf_handler)
            if not remote.is_configured:
                logger.warning(
                    "Remote OCR enabled but not configured; handwritten documents "
                    "will fall back to local OCR"
                )
        detector = DocumentTypeDetector()
        orchestrator = OcrOrchestrator(local, remote, detector)
        return cls(orchestrator, detector=detector)

    def process_document(
        self,
        file_bytes: bytes,
        file_name: str,
        is_pdf: bool | None = None,
        document_type: DocumentType | None = None,
    ) -> ExtractionOutcome:
        """Process one document.

        Args:
            file_bytes: Raw upload bytes.
            file_name: Original upload name, used for classification.
            is_pdf: Defaults to ``True`` for a ``.pdf`` extension.
            document_type: Caller-supplied type; bypasses classification.

        Returns:
            The extraction outcome, also for blank or failed OCR.

        Raises:
            ValueError: If ``file_bytes`` is empty.
        """
        if not file_bytes:
            raise ValueError("No file content provided")
        if is_pdf is None:
            is_pdf = is_pdf_file(file_name)

        logger.info(
            "Processing %s (%d bytes, pdf=%s)", file_name, len(file_bytes), is_pdf
        )
        ocr = self.orchestrator.run(file_bytes, file_name, is_pdf, document_type)
        resolved_type = ocr.document_type

        if not ocr.text.strip() or is_ocr_error(ocr.text):
            raw_text = ocr.text if ocr.text.strip() else NO_TEXT_MESSAGE
            logger.warning("No usable OCR text for %s: %s", file_name, raw_text)
            metadata = DocumentMetadata(
                document_name=derive_document_name(file_name),
                document_type=self.detector.get_document_type_display_name(resolved_type),
                raw_text=raw_text,
            )
            validation = ValidationResult(is_valid=False, messages=[raw_text])
        else:
            if document_type is None:
                metadata = self.metadata_service.extract_metadata(ocr.text, file_name)
            else:
                metadata = self.metadata_service.extract_metadata_for_document_type(
                    ocr.text, document_type, file_name
                )
            validation = self.metadata_service.validator.validate_document_metadata(
                metadata, resolved_type
            )

        return ExtractionOutcome(
            file_name=file_name,
            document_type=resolved_type,
            metadata=metadata,
            validation=validation,
            statistics=self.metadata_service.get_extraction_statistics(metadata),
            ocr_service_used=self.orchestrator.recommended_service(resolved_type),
            processed_at=datetime.now(UTC),
        )
