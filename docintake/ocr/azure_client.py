"""Remote OCR backend: Azure AI Vision image analysis (read feature).

Calls the REST endpoint directly with httpx. PDFs are rasterized locally and
each page is submitted as a PNG image.
"""

import io

import httpx
import numpy as np
from PIL import Image

from docintake.utils.config import RemoteOCRConfig
from docintake.utils.logger import get_logger

from .pdf_handler import PDFHandler
from .tesseract_engine import format_page

logger = get_logger(__name__)

ANALYZE_PATH = "/computervision/imageanalysis:analyze"


class RemoteOcrError(Exception):
    """Raised when the remote OCR service cannot produce text."""


def encode_png(image: np.ndarray) -> bytes:
    buffer = io.BytesIO()
    Image.fromarray(image).save(buffer, format="PNG")
    return buffer.getvalue()


def parse_read_result(payload: dict) -> str:
    """Join the recognised lines of an image analysis response.

    Raises:
        RemoteOcrError: If the payload has no ``readResult`` section.
    """
    read_result = payload.get("readResult")
    if not isinstance(read_result, dict):
        raise RemoteOcrError("Response missing readResult")

    lines: list[str] = []
    for block in read_result.get("blocks") or []:
        for line in block.get("lines") or []:
            text = str(line.get("text", "")).strip()
            if text:
                lines.append(text)
    return "\n".join(lines)


class AzureVisionOcrClient:
    """Client for the Azure AI Vision read endpoint.

    Args:
        endpoint: Resource endpoint, e.g. ``https://<name>.cognitiveservices.azure.com``.
        api_key: Subscription key sent as ``Ocp-Apim-Subscription-Key``.
        api_version: Image analysis API version.
        language: Language hint for the read model.
        timeout_seconds: Per-request timeout.
        pdf_handler: Rasterizer for PDF input.
        transport: Optional httpx transport, used to stub the service in tests.
    """

    name = "Azure"

    def __init__(
        self,
        endpoint: str | None,
        api_key: str | None,
        api_version: str = "2023-10-01",
        language: str = "fr",
        timeout_seconds: float = 30.0,
        pdf_handler: PDFHandler | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._endpoint = endpoint.rstrip("/") if endpoint else None
        self._api_key = api_key
        self._api_version = api_version
        self._language = language
        self._timeout_seconds = timeout_seconds
        self._transport = transport
        self.pdf_handler = pdf_handler or PDFHandler()

    @classmethod
    def from_config(
        cls, config: RemoteOCRConfig, pdf_handler: PDFHandler | None = None
    ) -> "AzureVisionOcrClient":
        return cls(
            endpoint=config.endpoint,
            api_key=config.api_key,
            api_version=config.api_version,
            language=config.language,
            timeout_seconds=config.timeout_seconds,
            pdf_handler=pdf_handler,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self._endpoint and self._api_key)

    def _client(self) -> httpx.Client:
        if not self.is_configured:
            raise RemoteOcrError("Remote OCR endpoint or key is not configured")
        return httpx.Client(
            base_url=self._endpoint,
            timeout=self._timeout_seconds,
            transport=self._transport,
            headers={"Ocp-Apim-Subscription-Key": self._api_key},
        )

    def _analyze(self, client: httpx.Client, image_bytes: bytes) -> str:
        try:
            resp = client.post(
                ANALYZE_PATH,
                params={
                    "features": "read",
                    "api-version": self._api_version,
                    "language": self._language,
                },
                content=image_bytes,
                headers={"Content-Type": "application/octet-stream"},
            )
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPError as exc:
            raise RemoteOcrError(f"Image analysis request failed: {exc}") from exc
        except ValueError as exc:
            raise RemoteOcrError("Image analysis returned invalid JSON") from exc
        return parse_read_result(payload)

    def extract_text(self, file_bytes: bytes, is_pdf: bool) -> str:
        """Recognise the text of an image or every page of a PDF.

        Args:
            file_bytes: Raw upload bytes.
            is_pdf: Rasterize and submit page by page when ``True``.

        Returns:
            Recognised lines; PDF pages carry ``--- Page N ---`` separators.

        Raises:
            RemoteOcrError: If the client is not configured or the service fails.
            RuntimeError: If a PDF cannot be rasterized.
        """
        with self._client() as client:
            if not is_pdf:
                logger.info("Submitting image (%d bytes) to remote OCR", len(file_bytes))
                return self._analyze(client, file_bytes)

            pages = self.pdf_handler.pdf_to_images(file_bytes)
            if not pages:
                raise RemoteOcrError("PDF contained no pages")

            logger.info("Submitting %d PDF pages to remote OCR", len(pages))
            rendered = [
                format_page(page_number, self._analyze(client, encode_png(image)))
                for page_number, image in enumerate(pages, start=1)
            ]
            return "\n\n".join(rendered)
