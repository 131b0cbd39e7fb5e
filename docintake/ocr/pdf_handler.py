"""PDF rasterization for the OCR backends.

Uploaded PDFs arrive as bytes; the CLI may also pass a file path. Each page
becomes one RGB numpy array, which both the local Tesseract backend and the
remote read service consume.
"""

from pathlib import Path

import numpy as np
from pdf2image import convert_from_bytes, convert_from_path
from PIL import Image

from docintake.utils.logger import get_logger

logger = get_logger(__name__)


class PDFHandler:
    """Renders PDF pages to images.

    Args:
        dpi: Rendering resolution. 300 keeps small print legible for OCR.
    """

    def __init__(self, dpi: int = 300) -> None:
        self.dpi = dpi

    def _render(self, pdf_source: Path | str | bytes) -> list[Image.Image]:
        if isinstance(pdf_source, bytes):
            return convert_from_bytes(pdf_source, dpi=self.dpi)
        path = Path(pdf_source)
        if not path.exists():
            raise FileNotFoundError(f"PDF file not found: {path}")
        return convert_from_path(str(path), dpi=self.dpi)

    def pdf_to_images(self, pdf_source: Path | bytes) -> list[np.ndarray]:
        """Rasterize every page of a PDF.

        Args:
            pdf_source: Raw PDF bytes or a path to a PDF file.

        Returns:
            One RGB array per page, in page order. Grayscale and CMYK pages
            are converted so every backend sees three channels.

        Raises:
            FileNotFoundError: If a path is given and the file does not exist.
            RuntimeError: If poppler cannot render the document.
        """
        try:
            pages = self._render(pdf_source)
        except FileNotFoundError:
            raise
        except Exception as exc:
            raise RuntimeError(f"PDF conversion failed: {exc}") from exc

        images = [np.array(page.convert("RGB")) for page in pages]
        logger.info("Rendered %d PDF pages at %d DPI", len(images), self.dpi)
        return images
