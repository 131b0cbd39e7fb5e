"""Pydantic request/response schemas for the FastAPI endpoints."""

from datetime import datetime

from pydantic import BaseModel


class DocumentMetadataResponse(BaseModel):
    """Extracted metadata; every vocabulary field is present."""

    document_name: str
    document_type: str
    niu_numbers: list[str] = []
    rccm_numbers: list[str] = []
    business_names: list[str] = []
    dates: list[str] = []
    registration_numbers: list[str] = []
    company_addresses: list[str] = []
    legal_forms: list[str] = []
    capital_amounts: list[str] = []
    registration_dates: list[str] = []
    delivered_dates: list[str] = []
    company_duration: list[str] = []
    tribunal_names: list[str] = []
    activity_codes: list[str] = []
    tax_attestation_numbers: list[str] = []
    tax_centers: list[str] = []
    tax_systems: list[str] = []
    acfe_references: list[str] = []
    document_locations_and_dates: list[str] = []
    quarters: list[str] = []
    phone_numbers: list[str] = []
    email_addresses: list[str] = []
    regimes: list[str] = []
    promoter_names: list[str] = []
    min_daily_revenue: list[str] = []
    max_daily_revenue: list[str] = []
    name: list[str] = []
    surname: list[str] = []
    birth_date: list[str] = []
    profession: list[str] = []
    raw_text: str = ""


class ValidationResultResponse(BaseModel):
    """Critical-field validation outcome."""

    is_valid: bool
    messages: list[str]


class ExtractionResponse(BaseModel):
    """Response schema for a single-document extraction request."""

    file_name: str
    document_type: str
    metadata: DocumentMetadataResponse
    extraction_statistics: dict[str, int | bool]
    validation_result: ValidationResultResponse
    ocr_service_used: str
    processed_at: datetime


class BatchItemResponse(BaseModel):
    """Response schema for a single item in a batch extraction."""

    file_name: str
    success: bool
    result: ExtractionResponse | None = None
    error: str | None = None


class BatchSummary(BaseModel):
    total_files_submitted: int
    files_processed: int
    files_skipped: int
    processing_date: datetime


class BatchExtractionResponse(BaseModel):
    """Response schema for batch extraction of multiple documents."""

    results: list[BatchItemResponse]
    summary: BatchSummary


class DocumentTypeInfo(BaseModel):
    """Information about a supported document type."""

    type: str
    display_name: str
    patterns: list[str]
    recommended_ocr_service: str
    is_handwritten: bool


class DocumentTypesResponse(BaseModel):
    document_types: list[DocumentTypeInfo]
    total_types: int


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
    tesseract_available: bool
    remote_ocr_configured: bool
