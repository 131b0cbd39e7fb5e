"""Tests for filename-based document type detection."""

import pytest

from docintake.classification.document_types import DocumentType
from docintake.classification.type_detector import (
    DocumentTypeDetector,
    document_type_from_display_name,
    get_patterns_for_document_type,
    get_supported_document_types,
    normalize_file_name,
)


class TestNormalizeFileName:
    """Tests for filename normalization."""

    def test_strips_extension_and_separators(self) -> None:
        assert normalize_file_name("Registre_Commerce-2023.v2.pdf") == "registrecommerce2023v2"

    def test_ignores_directories(self) -> None:
        assert normalize_file_name("uploads/CNI Jean.png") == "cnijean"


class TestDocumentTypeDetector:
    """Tests for DocumentTypeDetector.detect_document_type."""

    def setup_method(self) -> None:
        self.detector = DocumentTypeDetector()

    @pytest.mark.parametrize(
        ("file_name", "expected"),
        [
            ("RegistreCommerce_ABC.pdf", DocumentType.REGISTRE_COMMERCE),
            ("extrait_rccm.pdf", DocumentType.REGISTRE_COMMERCE),
            ("kbis-2023.pdf", DocumentType.REGISTRE_COMMERCE),
            ("CNI_Jean.png", DocumentType.CNI_OR_RECIPICE),
            ("recipice_depot.jpg", DocumentType.CNI_OR_RECIPICE),
            ("Carte_Contribuable.pdf", DocumentType.CARTE_CONTRIBUABLE_VALIDE),
            ("Attestation_Non_Redevance.pdf", DocumentType.ATTESTATION_FISCALE),
            ("attestation conformite fiscale.pdf", DocumentType.ATTESTATION_FISCALE),
            ("Formulaire_Agrege_OM.jpg", DocumentType.FORMULAIRE_AGREGE_OM),
        ],
    )
    def test_detects_known_types(self, file_name: str, expected: DocumentType) -> None:
        assert self.detector.detect_document_type(file_name) == expected

    @pytest.mark.parametrize("file_name", [None, "", "   ", "scan_0001.png"])
    def test_unknown_for_blank_or_unmatched(self, file_name: str | None) -> None:
        assert self.detector.detect_document_type(file_name) == DocumentType.UNKNOWN

    def test_same_normalized_name_classifies_identically(self) -> None:
        first = self.detector.detect_document_type("Registre Commerce.pdf")
        second = self.detector.detect_document_type("registre-commerce.PDF")
        assert normalize_file_name("Registre Commerce.pdf") == normalize_file_name(
            "registre-commerce.PDF"
        )
        assert first == second == DocumentType.REGISTRE_COMMERCE

    def test_table_order_breaks_ties(self) -> None:
        # Matches both the identity and the registry patterns.
        assert (
            self.detector.detect_document_type("cni_extrait.pdf")
            == DocumentType.CNI_OR_RECIPICE
        )

    def test_display_names(self) -> None:
        assert (
            self.detector.get_document_type_display_name(DocumentType.REGISTRE_COMMERCE)
            == "Registre du Commerce"
        )
        assert (
            self.detector.get_document_type_display_name(DocumentType.UNKNOWN)
            == "Document Type Unknown"
        )

    def test_is_specific_document_type(self) -> None:
        assert self.detector.is_specific_document_type(DocumentType.CNI_OR_RECIPICE)
        assert not self.detector.is_specific_document_type(DocumentType.UNKNOWN)


class TestDocumentTypeHelpers:
    """Tests for module-level lookups."""

    def test_display_name_round_trip(self) -> None:
        assert (
            document_type_from_display_name("attestation fiscale")
            == DocumentType.ATTESTATION_FISCALE
        )
        assert document_type_from_display_name("Nothing") == DocumentType.UNKNOWN
        assert document_type_from_display_name(None) == DocumentType.UNKNOWN

    def test_supported_types_exclude_unknown(self) -> None:
        supported = get_supported_document_types()
        assert DocumentType.UNKNOWN not in supported
        assert supported[0] == DocumentType.FORMULAIRE_AGREGE_OM
        assert len(supported) == 5

    def test_patterns_are_copies(self) -> None:
        patterns = get_patterns_for_document_type(DocumentType.REGISTRE_COMMERCE)
        patterns.append("mutated")
        assert "mutated" not in get_patterns_for_document_type(DocumentType.REGISTRE_COMMERCE)
        assert get_patterns_for_document_type(DocumentType.UNKNOWN) == []

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("RegistreCommerce", DocumentType.REGISTRE_COMMERCE),
            ("registrecommerce", DocumentType.REGISTRE_COMMERCE),
            ("CNI_OR_RECIPICE", DocumentType.CNI_OR_RECIPICE),
            ("unknown", DocumentType.UNKNOWN),
            ("", None),
            (None, None),
            ("Invoice", None),
        ],
    )
    def test_parse(self, value: str | None, expected: DocumentType | None) -> None:
        assert DocumentType.parse(value) == expected
