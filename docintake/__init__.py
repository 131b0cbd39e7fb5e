"""Business document intake system.

Classifies scanned regulatory and business documents, runs OCR through a
local Tesseract engine or a remote Azure AI Vision service, and extracts
type-specific structured metadata (NIU, RCCM, business names, dates, tax
references) from the recognised text.
"""

__version__ = "1.0.0"
