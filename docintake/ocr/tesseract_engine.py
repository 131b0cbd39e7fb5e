"""Local OCR backend built on Tesseract.

``TesseractEngine`` wraps pytesseract for a single decoded image;
``TesseractOcrService`` accepts raw upload bytes (image or PDF) and returns
the recognised text, marking page boundaries for multi-page documents.
"""

import io
from dataclasses import dataclass

import numpy as np
import pytesseract
from PIL import Image, UnidentifiedImageError

from docintake.utils.logger import get_logger

from .pdf_handler import PDFHandler

logger = get_logger(__name__)


@dataclass
class OCRResult:
    """OCR result for a single image or page."""

    text: str
    language: str
    confidence: float
    word_count: int = 0


class TesseractEngine:
    """Wrapper around Tesseract OCR for document text extraction.

    Args:
        tesseract_cmd: Path to the Tesseract executable.
            If ``None``, uses the system default.
        default_lang: Default OCR language code.
    """

    def __init__(
        self,
        tesseract_cmd: str | None = None,
        default_lang: str = "fra+eng",
    ) -> None:
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
        self.default_lang = default_lang

    def is_available(self) -> bool:
        """Check whether the Tesseract binary can be invoked."""
        try:
            pytesseract.get_tesseract_version()
        except (pytesseract.TesseractNotFoundError, OSError) as exc:
            logger.debug("Tesseract unavailable: %s", exc)
            return False
        return True

    def extract_text(
        self,
        image: np.ndarray,
        lang: str | None = None,
        psm: int = 3,
    ) -> OCRResult:
        """Extract text from an image.

        Args:
            image: Input image as a numpy array.
            lang: OCR language code. Defaults to the engine default.
            psm: Tesseract page segmentation mode.

        Returns:
            OCRResult containing the full text and mean word confidence.
        """
        lang = lang or self.default_lang
        config = f"--psm {psm}"

        pil_image = Image.fromarray(image)
        text = pytesseract.image_to_string(pil_image, lang=lang, config=config)

        data = pytesseract.image_to_data(
            pil_image,
            lang=lang,
            config=config,
            output_type=pytesseract.Output.DICT,
        )

        total_conf = 0.0
        word_count = 0
        for conf, word_text in zip(data["conf"], data["text"]):
            if float(conf) > 0 and word_text.strip():
                total_conf += float(conf)
                word_count += 1

        avg_conf = (total_conf / word_count / 100.0) if word_count > 0 else 0.0

        logger.info(
            "OCR extracted %d words with average confidence %.2f",
            word_count,
            avg_conf,
        )
        return OCRResult(
            text=text,
            language=lang,
            confidence=avg_conf,
            word_count=word_count,
        )


def decode_image(image_bytes: bytes) -> np.ndarray:
    """Decode uploaded image bytes into an RGB numpy array.

    Raises:
        ValueError: If the bytes are not a readable image.
    """
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            return np.array(img.convert("RGB"))
    except (UnidentifiedImageError, OSError) as exc:
        raise ValueError(f"Could not decode image: {exc}") from exc


def format_page(page_number: int, text: str) -> str:
    """Render one page of a multi-page document with its separator line."""
    if text.strip():
        return f"--- Page {page_number} ---\n{text.strip()}"
    return f"--- Page {page_number} (no text extracted) ---"


class TesseractOcrService:
    """Local OCR backend operating on raw upload bytes.

    Args:
        engine: Tesseract wrapper. Defaults to a ``TesseractEngine`` with
            system settings.
        pdf_handler: PDF rasterizer used for multi-page input.
        psm: Tesseract page segmentation mode.
    """

    name = "Tesseract"

    def __init__(
        self,
        engine: TesseractEngine | None = None,
        pdf_handler: PDFHandler | None = None,
        psm: int = 3,
    ) -> None:
        self.engine = engine or TesseractEngine()
        self.pdf_handler = pdf_handler or PDFHandler()
        self.psm = psm

    def process_image_and_extract_text(self, image_bytes: bytes) -> str:
        """Run OCR on a single encoded image.

        Raises:
            ValueError: If the bytes cannot be decoded as an image.
        """
        image = decode_image(image_bytes)
        result = self.engine.extract_text(image, psm=self.psm)
        return result.text.strip()

    def process_pdf_and_extract_text(self, pdf_bytes: bytes) -> str:
        """Run OCR on every page of a PDF.

        Returns:
            Page texts joined by blank lines, each preceded by its
            ``--- Page N ---`` separator. Empty string for a PDF with no pages.

        Raises:
            RuntimeError: If the PDF cannot be rasterized.
        """
        pages = self.pdf_handler.pdf_to_images(pdf_bytes)
        if not pages:
            logger.warning("PDF contained no pages")
            return ""

        rendered: list[str] = []
        for page_number, image in enumerate(pages, start=1):
            logger.info("Processing PDF page %d/%d", page_number, len(pages))
            result = self.engine.extract_text(image, psm=self.psm)
            rendered.append(format_page(page_number, result.text))

        logger.info("Finished OCR for %d PDF pages", len(pages))
        return "\n\n".join(rendered)

    def extract_text(self, file_bytes: bytes, is_pdf: bool) -> str:
        if is_pdf:
            return self.process_pdf_and_extract_text(file_bytes)
        return self.process_image_and_extract_text(file_bytes)
