"""Tests for the metadata extraction service."""

import logging

import pytest

from docintake.classification.document_types import DocumentType
from docintake.metadata.models import DocumentMetadata, has_non_empty_value
from docintake.metadata.service import MetadataService, derive_document_name
from docintake.validation.field_schema import get_fields_for_document_type


class TestDeriveDocumentName:
    """Tests for derive_document_name."""

    @pytest.mark.parametrize(
        ("file_name", "expected"),
        [
            ("RegistreCommerce_ABC.pdf", "Registre du Commerce"),
            ("extrait_rccm.pdf", "Extrait du Registre du Commerce"),
            ("KBIS.pdf", "Extrait K-bis"),
            ("Attestation_2023.pdf", "Attestation d'Immatriculation"),
            ("FormulaireAgregeOM.jpg", "Formulaire Agrégé OM"),
            ("cni_recto.png", "CNI ou Récépissé"),
            ("Recipice.png", "CNI ou Récépissé"),
            ("scan_0001.png", "scan_0001"),
            ("", "Unknown Document"),
            (None, "Unknown Document"),
        ],
    )
    def test_names(self, file_name: str | None, expected: str) -> None:
        assert derive_document_name(file_name) == expected


class TestMetadataService:
    """Tests for MetadataService.extract_metadata."""

    def setup_method(self) -> None:
        self.service = MetadataService()

    def test_registry_scenario(self) -> None:
        raw_text = (
            "RC/YAO/2020/B/1234\n"
            "CAPITAL SOCIAL: 1.000.000 FCFA\n"
            "NIU M012345678901A\n"
        )
        metadata = self.service.extract_metadata(raw_text, "RegistreCommerce_ABC.pdf")

        assert metadata.document_type == "Registre du Commerce"
        assert metadata.document_name == "Registre du Commerce"
        assert metadata.rccm_numbers == ["RC/YAO/2020/B/1234"]
        assert metadata.capital_amounts == ["1.000.000 FCFA"]
        assert metadata.niu_numbers == []
        assert metadata.raw_text == raw_text

    def test_null_filename_keeps_every_extracted_field(self, attestation_text: str) -> None:
        metadata = self.service.extract_metadata(attestation_text, None)

        assert metadata.document_type == "Document Type Unknown"
        assert metadata.document_name == "Unknown Document"
        assert metadata.niu_numbers == ["M012345678901A"]
        assert metadata.business_names == ["SUKA SARL"]
        assert metadata.tax_attestation_numbers == ["123456"]

    def test_filters_fields_outside_schema(self, attestation_text: str) -> None:
        metadata = self.service.extract_metadata_for_document_type(
            attestation_text, DocumentType.CARTE_CONTRIBUABLE_VALIDE, "carte.pdf"
        )
        assert metadata.niu_numbers == ["M012345678901A"]
        assert metadata.dates == []
        assert metadata.document_locations_and_dates == []

    def test_validation_failure_is_logged_not_raised(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING):
            metadata = self.service.extract_metadata(
                "nothing useful here", "Attestation_Fiscale.pdf"
            )
        assert isinstance(metadata, DocumentMetadata)
        assert "Critical field 'BusinessNames' is missing or empty" in caplog.text

    def test_extraction_statistics(self, attestation_text: str) -> None:
        metadata = self.service.extract_metadata(attestation_text, "Attestation_Fiscale.pdf")
        stats = self.service.get_extraction_statistics(metadata)

        assert stats["niu_numbers_count"] == 1
        assert stats["business_names_count"] == 1
        assert stats["tax_attestation_numbers_count"] == 1
        assert stats["rccm_numbers_count"] == 0
        assert stats["email_addresses_count"] == 1
        assert stats["has_raw_text"] is True
        assert stats["total_fields_extracted"] == (
            self.service.validator.count_non_empty_fields(metadata)
        )

    def test_no_values_outside_registry_schema(self) -> None:
        raw_text = "RC/YAO/2020/B/1234\nCAPITAL SOCIAL: 1.000.000 FCFA\nNIU M012345678901A"
        metadata = self.service.extract_metadata(raw_text, "RegistreCommerce_ABC.pdf")

        allowed = get_fields_for_document_type(DocumentType.REGISTRE_COMMERCE)
        outside = {
            name: value
            for name, value in metadata.iter_fields()
            if name not in allowed and has_non_empty_value(value)
        }
        assert outside == {}
        assert metadata.raw_text == raw_text
