"""Tests for the batch processing CLI and CSV export."""

import csv
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from docintake.classification.document_types import DocumentType
from docintake.cli import (
    _find_documents,
    _print_summary,
    _write_csv,
    extract_single,
    list_types,
    main,
    process_folder,
)


def _write_documents(folder: Path, names: list[str]) -> None:
    for name in names:
        (folder / name).write_bytes(b"fake document")


def _read_csv(path: Path) -> list[dict[str, str]]:
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))


class TestFindDocuments:
    """Tests for the _find_documents helper."""

    def test_finds_supported_files(self, tmp_path: Path) -> None:
        _write_documents(tmp_path, ["a.png", "b.PDF", "c.tif", "notes.txt"])
        found = _find_documents(tmp_path)
        assert [p.name for p in found] == ["a.png", "b.PDF", "c.tif"]

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert _find_documents(tmp_path) == []


class TestWriteCsv:
    """Tests for the _write_csv helper."""

    def test_columns_follow_field_order(self, tmp_path: Path) -> None:
        output = tmp_path / "out" / "results.csv"
        results = [
            {"filename": "a.png", "status": "success", "RccmNumbers": "RC/X", "NiuNumbers": "M1"},
            {"filename": "b.png", "status": "failed", "error": "boom"},
        ]
        _write_csv(results, output)

        with open(output, newline="", encoding="utf-8") as f:
            header = next(csv.reader(f))
        assert header == ["filename", "status", "error", "NiuNumbers", "RccmNumbers"]

    def test_no_results_writes_nothing(self, tmp_path: Path) -> None:
        output = tmp_path / "results.csv"
        _write_csv([], output)
        assert not output.exists()


class TestProcessFolder:
    """Tests for process_folder."""

    def test_batch_to_csv(self, tmp_path: Path, make_pipeline, registry_text: str) -> None:
        _write_documents(tmp_path, ["RegistreCommerce_1.png", "RegistreCommerce_2.pdf"])
        (tmp_path / "empty.png").write_bytes(b"")
        output = tmp_path / "results.csv"

        summary = process_folder(
            tmp_path, output, pipeline=make_pipeline(local_text=registry_text)
        )

        assert summary == {"total": 3, "successful": 2, "failed": 1}
        rows = {row["filename"]: row for row in _read_csv(output)}
        registry = rows["RegistreCommerce_1.png"]
        assert registry["status"] == "success"
        assert registry["document_type"] == "RegistreCommerce"
        assert registry["document_name"] == "Registre du Commerce"
        assert registry["validation_passed"] == "True"
        assert registry["RccmNumbers"] == "RC/DLA/2019/B/1234"
        assert rows["empty.png"]["status"] == "failed"
        assert "No file content" in rows["empty.png"]["error"]

    def test_document_type_override(
        self, tmp_path: Path, make_pipeline, attestation_text: str
    ) -> None:
        _write_documents(tmp_path, ["scan.png"])
        output = tmp_path / "results.csv"

        process_folder(
            tmp_path,
            output,
            document_type=DocumentType.ATTESTATION_FISCALE,
            pipeline=make_pipeline(local_text=attestation_text),
        )

        row = _read_csv(output)[0]
        assert row["document_type"] == "AttestationFiscale"
        assert row["TaxAttestationNumbers"] == "123456"

    def test_empty_folder(self, tmp_path: Path, make_pipeline) -> None:
        output = tmp_path / "results.csv"
        summary = process_folder(tmp_path, output, pipeline=make_pipeline())
        assert summary == {"total": 0, "successful": 0, "failed": 0}
        assert not output.exists()


class TestExtractSingle:
    """Tests for extract_single."""

    def test_returns_serialized_outcome(
        self, tmp_path: Path, make_pipeline, registry_text: str
    ) -> None:
        path = tmp_path / "RegistreCommerce_ABC.pdf"
        path.write_bytes(b"%PDF-1.4")

        result = extract_single(path, pipeline=make_pipeline(local_text=registry_text))

        assert result["file_name"] == "RegistreCommerce_ABC.pdf"
        assert result["metadata"]["rccm_numbers"] == ["RC/DLA/2019/B/1234"]
        json.dumps(result)


class TestListTypes:
    """Tests for list_types."""

    def test_all_detectable_types(self, make_pipeline) -> None:
        types = list_types(make_pipeline())
        assert [t["type"] for t in types] == [
            "FormulaireAgregeOM",
            "CniOrRecipice",
            "RegistreCommerce",
            "CarteContribuabledValide",
            "AttestationFiscale",
        ]

    def test_service_follows_remote_configuration(self, make_pipeline) -> None:
        local_only = list_types(make_pipeline())
        with_remote = list_types(make_pipeline(remote_text="remote text"))

        assert local_only[0]["recommended_ocr_service"] == "Tesseract OCR"
        assert with_remote[0]["recommended_ocr_service"] == "Azure Document Analysis"
        assert with_remote[2]["recommended_ocr_service"] == "Tesseract OCR"


class TestMain:
    """Tests for argument parsing and dispatch."""

    def test_types_command(self, capsys: pytest.CaptureFixture, make_pipeline) -> None:
        with patch(
            "docintake.cli.DocumentPipeline.from_config", return_value=make_pipeline()
        ):
            main(["types"])
        data = json.loads(capsys.readouterr().out)
        assert len(data) == 5
        assert data[0]["display_name"] == "Formulaire Agrégé OM"

    def test_extract_command_writes_json(
        self, tmp_path: Path, make_pipeline, registry_text: str
    ) -> None:
        path = tmp_path / "RegistreCommerce.png"
        path.write_bytes(b"img")
        output = tmp_path / "out" / "result.json"

        with patch(
            "docintake.cli.DocumentPipeline.from_config",
            return_value=make_pipeline(local_text=registry_text),
        ):
            main(["extract", str(path), "-o", str(output)])

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["document_type"] == "RegistreCommerce"

    def test_batch_command(self, tmp_path: Path, make_pipeline, registry_text: str) -> None:
        _write_documents(tmp_path, ["RegistreCommerce.png"])
        output = tmp_path / "results.csv"

        with patch(
            "docintake.cli.DocumentPipeline.from_config",
            return_value=make_pipeline(local_text=registry_text),
        ):
            main(["batch", str(tmp_path), "-o", str(output), "-t", "RegistreCommerce", "-w", "2"])

        rows = _read_csv(output)
        assert rows[0]["document_type"] == "RegistreCommerce"

    def test_batch_rejects_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["batch", str(tmp_path / "missing")])
        assert exc_info.value.code == 1

    def test_extract_rejects_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["extract", str(tmp_path / "missing.png")])
        assert exc_info.value.code == 1

    def test_invalid_type_choice(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["batch", str(tmp_path), "-t", "Passport"])
        assert exc_info.value.code == 2

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "usage" in capsys.readouterr().out.lower()


class TestPrintSummary:
    """Tests for _print_summary."""

    def test_output(self, capsys: pytest.CaptureFixture) -> None:
        _print_summary({"total": 3, "successful": 2, "failed": 1}, Path("out.csv"))
        out = capsys.readouterr().out
        assert "Total:      3" in out
        assert "Failed:     1" in out
