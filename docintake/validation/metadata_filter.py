"""Type-specific filtering and validation of extracted metadata.

Filtering zeroes every field outside the document type's schema so that
consumers see a stable record shape; validation checks the type's critical
fields and reports each one that came back empty.
"""

from dataclasses import dataclass, field

from docintake.classification.document_types import DISPLAY_NAMES, DocumentType
from docintake.metadata.models import (
    FIELD_ACCESSORS,
    DocumentMetadata,
    has_non_empty_value,
)
from docintake.utils.logger import get_logger

from .field_schema import (
    get_critical_fields_for_document_type,
    get_fields_for_document_type,
)

logger = get_logger(__name__)

UNKNOWN_TYPE_MESSAGE = "Document type is unknown - validation skipped"


@dataclass
class ValidationResult:
    """Outcome of checking a record against its critical fields."""

    is_valid: bool = True
    messages: list[str] = field(default_factory=list)


@dataclass
class MetadataSummary:
    """Descriptive summary of a filtered record."""

    document_type: str
    document_type_display_name: str
    extracted_fields_count: int
    is_filtered: bool
    allowed_fields: list[str] | None
    allowed_fields_count: int


def _missing_field_message(field_name: str) -> str:
    return f"Critical field '{field_name}' is missing or empty"


class MetadataFilterValidator:
    """Applies document-type schemas to ``DocumentMetadata`` records."""

    def filter_metadata_by_document_type(
        self, metadata: DocumentMetadata, document_type: DocumentType
    ) -> DocumentMetadata:
        """Zero every field that is not part of the type's schema.

        Args:
            metadata: Unfiltered record.
            document_type: Type whose schema applies.

        Returns:
            ``metadata`` itself for ``UNKNOWN``; otherwise a new record.
        """
        if document_type == DocumentType.UNKNOWN:
            logger.debug("Unknown document type, skipping metadata filtering")
            return metadata

        allowed = get_fields_for_document_type(document_type)
        cleared = {
            name: accessor.zero()
            for name, accessor in FIELD_ACCESSORS.items()
            if name not in allowed
        }
        logger.debug(
            "Filtered %d fields out of %s metadata", len(cleared), document_type
        )
        return metadata.with_fields(cleared)

    def validate_document_metadata(
        self, metadata: DocumentMetadata, document_type: DocumentType
    ) -> ValidationResult:
        """Check every critical field of the type for a non-empty value."""
        if document_type == DocumentType.UNKNOWN:
            return ValidationResult(is_valid=True, messages=[UNKNOWN_TYPE_MESSAGE])

        result = ValidationResult()
        for field_name in sorted(get_critical_fields_for_document_type(document_type)):
            if not has_non_empty_value(metadata.get_field(field_name)):
                result.is_valid = False
                result.messages.append(_missing_field_message(field_name))
        return result

    def get_metadata_summary(
        self, metadata: DocumentMetadata, document_type: DocumentType
    ) -> MetadataSummary:
        is_filtered = document_type != DocumentType.UNKNOWN
        allowed = sorted(get_fields_for_document_type(document_type)) if is_filtered else None
        return MetadataSummary(
            document_type=document_type.name,
            document_type_display_name=DISPLAY_NAMES.get(document_type, document_type.value),
            extracted_fields_count=self.count_non_empty_fields(metadata),
            is_filtered=is_filtered,
            allowed_fields=allowed,
            allowed_fields_count=len(allowed) if allowed is not None else 0,
        )

    def count_non_empty_fields(self, metadata: DocumentMetadata) -> int:
        """Count non-blank strings and non-empty lists, identity fields included."""
        return sum(1 for _, value in metadata.iter_fields() if has_non_empty_value(value))
