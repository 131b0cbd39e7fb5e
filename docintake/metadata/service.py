"""Metadata extraction service.

Turns OCR text into a filtered, validated ``DocumentMetadata`` record:
classify, extract, assemble, filter, validate.
"""

from pathlib import PurePath

from docintake.classification.document_types import DocumentType
from docintake.classification.type_detector import DocumentTypeDetector
from docintake.extraction.field_extractor import FieldExtractor
from docintake.utils.logger import get_logger
from docintake.validation.metadata_filter import MetadataFilterValidator

from .models import FIELD_ACCESSORS, DocumentMetadata

logger = get_logger(__name__)

UNKNOWN_DOCUMENT_NAME = "Unknown Document"

# Checked in order against the uppercased filename stem.
_DOCUMENT_NAME_PREFIXES: tuple[tuple[str, str], ...] = (
    ("REGISTRECOMMERCE", "Registre du Commerce"),
    ("EXTRAIT", "Extrait du Registre du Commerce"),
    ("KBIS", "Extrait K-bis"),
    ("ATTESTATION", "Attestation d'Immatriculation"),
    ("FORMULAIREAGREGEOM", "Formulaire Agrégé OM"),
    ("CNI", "CNI ou Récépissé"),
    ("RECIPICE", "CNI ou Récépissé"),
)

_STATISTIC_FIELDS: tuple[tuple[str, str], ...] = (
    ("niu_numbers_count", "NiuNumbers"),
    ("rccm_numbers_count", "RccmNumbers"),
    ("business_names_count", "BusinessNames"),
    ("dates_count", "Dates"),
    ("registration_numbers_count", "RegistrationNumbers"),
    ("tax_attestation_numbers_count", "TaxAttestationNumbers"),
    ("phone_numbers_count", "PhoneNumbers"),
    ("email_addresses_count", "EmailAddresses"),
)


def derive_document_name(file_name: str | None) -> str:
    """Derive a human-readable document name from an upload filename.

    Args:
        file_name: Original upload name.

    Returns:
        A canonical name for recognised prefixes, otherwise the bare stem.
    """
    if file_name is None or not file_name.strip():
        return UNKNOWN_DOCUMENT_NAME

    stem = PurePath(file_name.strip()).stem
    upper = stem.upper()
    for prefix, document_name in _DOCUMENT_NAME_PREFIXES:
        if upper.startswith(prefix):
            return document_name
    return stem


class MetadataService:
    """Builds filtered metadata records from OCR text.

    Args:
        detector: Filename classifier.
        extractor: Regex field extractor.
        validator: Schema filter and critical-field validator.
    """

    def __init__(
        self,
        detector: DocumentTypeDetector | None = None,
        extractor: FieldExtractor | None = None,
        validator: MetadataFilterValidator | None = None,
    ) -> None:
        self.detector = detector or DocumentTypeDetector()
        self.extractor = extractor or FieldExtractor()
        self.validator = validator or MetadataFilterValidator()

    def extract_metadata(self, raw_text: str, file_name: str | None) -> DocumentMetadata:
        """Classify by filename and extract metadata from OCR text."""
        document_type = self.detector.detect_document_type(file_name)
        return self.extract_metadata_for_document_type(raw_text, document_type, file_name)

    def extract_metadata_for_document_type(
        self,
        raw_text: str,
        document_type: DocumentType,
        file_name: str | None = None,
    ) -> DocumentMetadata:
        """Extract metadata with a known document type.

        Validation failures are logged, never raised; the caller re-runs
        validation when it needs the messages.
        """
        raw_text = raw_text or ""
        logger.info(
            "Extracting metadata for %s as %s (%d characters)",
            file_name,
            document_type,
            len(raw_text),
        )

        fields = self.extractor.extract_fields(raw_text, document_type)
        known = {name: values for name, values in fields.items() if name in FIELD_ACCESSORS}
        metadata = DocumentMetadata(
            document_name=derive_document_name(file_name),
            document_type=self.detector.get_document_type_display_name(document_type),
            raw_text=raw_text,
        ).with_fields(known)

        filtered = self.validator.filter_metadata_by_document_type(metadata, document_type)

        validation = self.validator.validate_document_metadata(filtered, document_type)
        if not validation.is_valid:
            logger.warning(
                "Metadata validation failed for %s: %s",
                file_name,
                "; ".join(validation.messages),
            )

        summary = self.validator.get_metadata_summary(filtered, document_type)
        logger.info(
            "Metadata summary for %s: type=%s, fields=%d, filtered=%s",
            file_name,
            summary.document_type,
            summary.extracted_fields_count,
            summary.is_filtered,
        )
        return filtered

    def get_extraction_statistics(self, metadata: DocumentMetadata) -> dict[str, int | bool]:
        """Count extracted values for the headline fields."""
        stats: dict[str, int | bool] = {
            "total_fields_extracted": self.validator.count_non_empty_fields(metadata),
        }
        for key, field_name in _STATISTIC_FIELDS:
            stats[key] = len(metadata.get_field(field_name))
        stats["has_raw_text"] = bool(metadata.raw_text.strip())
        return stats
