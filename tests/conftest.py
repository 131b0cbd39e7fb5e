"""Shared test fixtures for the document intake test suite."""

import io
from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from docintake.ocr.orchestrator import OcrOrchestrator
from docintake.pipeline.document_pipeline import DocumentPipeline

ATTESTATION_TEXT = """REPUBLIQUE DU CAMEROUN
ATTESTATION D'IMMATRICULATION N° 123456
Raison sociale : SUKA SARL
NIU : M012345678901A
Centre des impôts de rattachement : CDI YAOUNDE 1
Régime fiscal : REEL
Tel : 699123456
Email : contact@suka.cm
Quartier : BASTOS
DOUALA, le 15/03/2023
"""

REGISTRY_TEXT = """REGISTRE DU COMMERCE ET DU CREDIT MOBILIER
RC/DLA/2019/B/1234
ALPHA TRADING SARL
CAPITAL SOCIAL : 1.000.000 FCFA
ADRESSE DU SIEGE : 12 Rue de la Joie, Akwa
Date d'immatriculation : 12/04/2019
Durée : 99 ANS
NIU : M012345678901A
"""


@pytest.fixture
def sample_image() -> np.ndarray:
    """Create a simple synthetic RGB test image."""
    image = np.zeros((200, 300, 3), dtype=np.uint8)
    image[50:150, 50:250] = (255, 255, 255)
    return image


@pytest.fixture
def png_bytes(sample_image: np.ndarray) -> bytes:
    """Encode the sample image as PNG bytes."""
    buf = io.BytesIO()
    Image.fromarray(sample_image).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def attestation_text() -> str:
    return ATTESTATION_TEXT


@pytest.fixture
def registry_text() -> str:
    return REGISTRY_TEXT


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def config_dir(project_root: Path) -> Path:
    """Return the configs directory path."""
    return project_root / "configs"


class StubBackend:
    """OCR backend returning canned text or raising a canned error."""

    def __init__(self, name: str, text: str = "", error: Exception | None = None) -> None:
        self.name = name
        self.text = text
        self.error = error

    def extract_text(self, file_bytes: bytes, is_pdf: bool) -> str:
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def make_pipeline() -> Callable[..., DocumentPipeline]:
    """Build a pipeline over stub OCR backends.

    The remote backend is only wired when ``remote_text`` or ``remote_error``
    is given.
    """

    def _make(
        local_text: str = "",
        local_error: Exception | None = None,
        remote_text: str | None = None,
        remote_error: Exception | None = None,
    ) -> DocumentPipeline:
        local = StubBackend("Tesseract", local_text, local_error)
        remote = None
        if remote_text is not None or remote_error is not None:
            remote = StubBackend("Azure", remote_text or "", remote_error)
        return DocumentPipeline(OcrOrchestrator(local, remote))

    return _make
