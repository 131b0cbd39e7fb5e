"""Configuration management for the document intake system.

Loads and validates YAML configuration with sensible defaults
for OCR backends, the HTTP layer, batch processing, and logging.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class OCRConfig(BaseModel):
    """Configuration for the local Tesseract OCR engine."""

    tesseract_cmd: str | None = None
    default_lang: str = "fra+eng"
    psm: int = 3
    pdf_dpi: int = 300


class RemoteOCRConfig(BaseModel):
    """Configuration for the Azure AI Vision read endpoint."""

    enabled: bool = True
    endpoint: str | None = None
    api_key: str | None = None
    api_version: str = "2023-10-01"
    timeout_seconds: float = 30.0
    language: str = "fr"


class APIConfig(BaseModel):
    """Upload limits enforced by the HTTP layer."""

    max_file_size_mb: int = 20
    max_batch_files: int = 10


class BatchConfig(BaseModel):
    """Configuration for concurrent batch processing."""

    max_workers: int = 4


class AppConfig(BaseModel):
    """Top-level application configuration."""

    ocr: OCRConfig = Field(default_factory=OCRConfig)
    remote_ocr: RemoteOCRConfig = Field(default_factory=RemoteOCRConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    batch: BatchConfig = Field(default_factory=BatchConfig)
    log_level: str = "INFO"
    log_file: str | None = None


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.
            Defaults to configs/config.yaml.

    Returns:
        Validated application configuration.
    """
    if path is None:
        path = Path("configs/config.yaml")

    if path.exists():
        logger.info("Loading configuration from %s", path)
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        return AppConfig(**raw)

    logger.info("No config file found at %s, using defaults", path)
    return AppConfig()
