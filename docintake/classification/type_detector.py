"""Filename-based document type detection.

Maps an uploaded filename onto one of the known document categories by
substring matching against an ordered pattern table.
"""

from pathlib import PurePath

from docintake.utils.logger import get_logger

from .document_types import DEFAULT_DISPLAY_NAME, DISPLAY_NAMES, DocumentType

logger = get_logger(__name__)


# Order is significant: the first type with a matching pattern wins.
# Patterns are stored in normalized form (no separators, lowercase).
_FILENAME_PATTERNS: tuple[tuple[DocumentType, tuple[str, ...]], ...] = (
    (
        DocumentType.FORMULAIRE_AGREGE_OM,
        ("formulaireagregeom", "agregeom"),
    ),
    (
        DocumentType.CNI_OR_RECIPICE,
        ("cni", "recipice", "carteidentite", "identite"),
    ),
    (
        DocumentType.REGISTRE_COMMERCE,
        ("registrecommerce", "extrait", "kbis", "commerce"),
    ),
    (
        DocumentType.CARTE_CONTRIBUABLE_VALIDE,
        ("cartecontribuablevalide", "cartecontribuable", "contribuablevalide", "contribuable"),
    ),
    (
        DocumentType.ATTESTATION_FISCALE,
        (
            "attestationnonredevance",
            "attestationconformitefiscal",
            "conformitefiscal",
            "attestationfiscal",
            "nonredevance",
        ),
    ),
)

_SEPARATORS = (" ", "_", "-", ".")


def normalize_file_name(file_name: str) -> str:
    """Strip the extension, lowercase, and drop spaces, underscores, hyphens, dots.

    Args:
        file_name: Original upload name, possibly with directories.

    Returns:
        Normalized name used for pattern matching.
    """
    normalized = PurePath(file_name).stem.lower()
    for separator in _SEPARATORS:
        normalized = normalized.replace(separator, "")
    return normalized


class DocumentTypeDetector:
    """Classifies documents from their filenames.

    Detection is a pure function of the normalized filename; it never
    raises and resolves anything it cannot place to ``DocumentType.UNKNOWN``.
    """

    def detect_document_type(self, file_name: str | None) -> DocumentType:
        """Detect the document type for a filename.

        Args:
            file_name: Original upload name, or ``None``.

        Returns:
            The first matching document type in table order, or ``UNKNOWN``.
        """
        if file_name is None or not file_name.strip():
            logger.warning("File name is empty, returning Unknown document type")
            return DocumentType.UNKNOWN

        normalized = normalize_file_name(file_name)
        logger.debug("Normalized file name '%s' from '%s'", normalized, file_name)

        for document_type, patterns in _FILENAME_PATTERNS:
            if any(pattern in normalized for pattern in patterns):
                logger.info(
                    "Detected document type '%s' for file '%s'", document_type, file_name
                )
                return document_type

        logger.info("Could not detect document type for file '%s'", file_name)
        return DocumentType.UNKNOWN

    def get_document_type_display_name(self, document_type: DocumentType) -> str:
        """Return the human-readable label for a document type."""
        return DISPLAY_NAMES.get(document_type, DEFAULT_DISPLAY_NAME)

    def is_specific_document_type(self, document_type: DocumentType) -> bool:
        return document_type != DocumentType.UNKNOWN


def document_type_from_display_name(display_name: str | None) -> DocumentType:
    """Map a display name back to its document type.

    Args:
        display_name: Label produced by ``get_document_type_display_name``.

    Returns:
        The matching type, or ``UNKNOWN`` when the label is not recognised.
    """
    if not display_name or not display_name.strip():
        return DocumentType.UNKNOWN
    wanted = display_name.strip().casefold()
    for document_type, label in DISPLAY_NAMES.items():
        if label.casefold() == wanted:
            return document_type
    return DocumentType.UNKNOWN


def get_supported_document_types() -> list[DocumentType]:
    """List the detectable document types in detection order."""
    return [document_type for document_type, _ in _FILENAME_PATTERNS]


def get_patterns_for_document_type(document_type: DocumentType) -> list[str]:
    """Return a copy of the filename patterns for a document type."""
    for candidate, patterns in _FILENAME_PATTERNS:
        if candidate == document_type:
            return list(patterns)
    return []
