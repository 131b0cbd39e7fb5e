"""Document-type-aware field extraction using regex patterns.

Each document type has an extraction plan: an ordered tuple of field rules,
each rule turning raw OCR text into a list of unique values for one field.
Unknown or unmapped types fall back to a generic plan that sweeps every
common field.
"""

import re
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import NamedTuple

from docintake.classification.document_types import DocumentType
from docintake.utils.logger import get_logger
from docintake.validation.field_schema import get_fields_for_document_type

from . import field_patterns as p

logger = get_logger(__name__)

Extractor = Callable[[str], list[str]]


class FieldRule(NamedTuple):
    """Extraction routine producing the values of one field."""

    field_name: str
    extract: Extractor


def _append_unique(values: list[str], candidate: str | None) -> None:
    if candidate is None:
        return
    candidate = candidate.strip()
    if candidate and candidate not in values:
        values.append(candidate)


def matches(*patterns: re.Pattern) -> Extractor:
    """Collect group 1 (or the whole match) of every pattern, in order."""

    def extract(text: str) -> list[str]:
        values: list[str] = []
        for pattern in patterns:
            for match in pattern.finditer(text):
                _append_unique(values, match.group(1) if pattern.groups else match.group(0))
        return values

    return extract


def amounts(pattern: re.Pattern) -> Extractor:
    """Join an amount group and a currency group as ``"<amount> <currency>"``."""

    def extract(text: str) -> list[str]:
        values: list[str] = []
        for match in pattern.finditer(text):
            amount = (match.group(1) or "").strip()
            currency = (match.group(2) or "").strip()
            if amount:
                _append_unique(values, f"{amount} {currency}")
        return values

    return extract


def locations_and_dates(pattern: re.Pattern) -> Extractor:
    """Join a location group and a date group as ``"<location>, <date>"``."""

    def extract(text: str) -> list[str]:
        values: list[str] = []
        for match in pattern.finditer(text):
            location = (match.group(1) or "").strip()
            date = (match.group(2) or "").strip()
            if location and date:
                _append_unique(values, f"{location}, {date}")
        return values

    return extract


def is_valid_email(email: str) -> bool:
    """Loose address check: ``@`` inside the string and a dotted domain."""
    if not email or not email.strip():
        return False
    at_index = email.find("@")
    if at_index <= 0 or at_index == len(email) - 1:
        return False
    domain = email[at_index + 1 :]
    return "." in domain and len(domain) > 3


def emails(labeled: re.Pattern, bare: re.Pattern) -> Extractor:
    """Labeled-context pass first, then a bare scan of the whole text."""

    def extract(text: str) -> list[str]:
        values: list[str] = []
        candidates = [match.group(1) for match in labeled.finditer(text)]
        candidates.extend(match.group(0) for match in bare.finditer(text))
        for candidate in candidates:
            if candidate and is_valid_email(candidate.strip()):
                _append_unique(values, candidate)
        return values

    return extract


_EMAILS = emails(p.EMAIL_LABELED, p.EMAIL_BARE)
_TAX_ATTESTATION_NUMBERS = matches(p.TAX_ATTESTATION_HEADER, p.GENERIC_NUMBER)
_LOCATIONS_AND_DATES = locations_and_dates(p.LOCATION_DATE)

FORMULAIRE_AGREGE_OM_PLAN: tuple[FieldRule, ...] = (
    FieldRule("BusinessNames", matches(p.AGREGE_BUSINESS_NAME)),
    FieldRule("PromoterNames", matches(p.PROMOTER_NAME)),
    FieldRule("RegistrationNumbers", matches(p.REGISTRATION_NUMBER)),
    FieldRule("CompanyAddresses", matches(p.AGREGE_ADDRESS)),
    FieldRule("LegalForms", matches(p.LEGAL_FORM)),
    FieldRule("CapitalAmounts", amounts(p.CAPITAL_AMOUNT)),
    FieldRule("ActivityCodes", matches(p.AGREGE_ACTIVITY)),
    FieldRule("PhoneNumbers", matches(p.AGREGE_PHONE, p.PHONE)),
    FieldRule("EmailAddresses", _EMAILS),
    FieldRule("MinDailyRevenue", amounts(p.MIN_DAILY_REVENUE)),
    FieldRule("MaxDailyRevenue", amounts(p.MAX_DAILY_REVENUE)),
)

CNI_OR_RECIPICE_PLAN: tuple[FieldRule, ...] = (
    FieldRule("Name", matches(p.PERSON_NAME)),
    FieldRule("Surname", matches(p.PERSON_SURNAME)),
    FieldRule("RegistrationNumbers", matches(p.ID_CARD_NUMBER)),
    FieldRule("BirthDate", matches(p.BIRTH_DATE)),
    FieldRule("Profession", matches(p.PROFESSION)),
    FieldRule("Dates", matches(p.DATE)),
    FieldRule("DocumentLocationsAndDates", _LOCATIONS_AND_DATES),
)

REGISTRE_COMMERCE_PLAN: tuple[FieldRule, ...] = (
    FieldRule("RccmNumbers", matches(p.RCCM)),
    FieldRule("BusinessNames", matches(p.COMPANY_WITH_LEGAL_FORM, p.LABELED_BUSINESS_NAME)),
    FieldRule("RegistrationNumbers", matches(p.REGISTRATION_NUMBER)),
    FieldRule("CompanyAddresses", matches(p.ADDRESS)),
    FieldRule("LegalForms", matches(p.LEGAL_FORM)),
    FieldRule("CapitalAmounts", amounts(p.CAPITAL_AMOUNT)),
    FieldRule("RegistrationDates", matches(p.REGISTRATION_DATE)),
    FieldRule("DeliveredDates", matches(p.DELIVERED_DATE)),
    FieldRule("CompanyDuration", matches(p.COMPANY_DURATION)),
    FieldRule("TribunalNames", matches(p.TRIBUNAL)),
    FieldRule("ActivityCodes", matches(p.ACTIVITY_CODE)),
    FieldRule("Quarters", matches(p.QUARTER)),
    FieldRule("PhoneNumbers", matches(p.PHONE)),
    FieldRule("EmailAddresses", _EMAILS),
)

CARTE_CONTRIBUABLE_PLAN: tuple[FieldRule, ...] = (
    FieldRule("NiuNumbers", matches(p.NIU)),
    FieldRule("BusinessNames", matches(p.LABELED_BUSINESS_NAME)),
    FieldRule("TaxAttestationNumbers", matches(p.TAX_CARD_NUMBER)),
    FieldRule("TaxCenters", matches(p.TAX_CENTER)),
    FieldRule("TaxSystems", matches(p.TAX_SYSTEM)),
    FieldRule("CompanyAddresses", matches(p.ADDRESS)),
    FieldRule("Quarters", matches(p.QUARTER)),
    FieldRule("PhoneNumbers", matches(p.PHONE)),
    FieldRule("EmailAddresses", _EMAILS),
    FieldRule("Regimes", matches(p.REGIME)),
)

ATTESTATION_FISCALE_PLAN: tuple[FieldRule, ...] = (
    FieldRule("NiuNumbers", matches(p.NIU)),
    FieldRule("BusinessNames", matches(p.ATTESTATION_BUSINESS_NAME)),
    FieldRule("Dates", matches(p.DATE)),
    FieldRule("TaxAttestationNumbers", _TAX_ATTESTATION_NUMBERS),
    FieldRule("TaxCenters", matches(p.TAX_CENTER)),
    FieldRule("TaxSystems", matches(p.TAX_SYSTEM)),
    FieldRule("AcfeReferences", matches(p.ACFE_REFERENCE)),
    FieldRule("CompanyAddresses", matches(p.ADDRESS)),
    FieldRule("Quarters", matches(p.QUARTER)),
    FieldRule("PhoneNumbers", matches(p.PHONE)),
    FieldRule("EmailAddresses", _EMAILS),
    FieldRule("Regimes", matches(p.REGIME)),
    FieldRule("DocumentLocationsAndDates", _LOCATIONS_AND_DATES),
)

GENERIC_PLAN: tuple[FieldRule, ...] = (
    FieldRule("NiuNumbers", matches(p.NIU)),
    FieldRule("RccmNumbers", matches(p.RCCM)),
    FieldRule("BusinessNames", matches(p.COMPANY_WITH_LEGAL_FORM)),
    FieldRule("Dates", matches(p.DATE)),
    FieldRule("RegistrationNumbers", matches(p.REGISTRATION_NUMBER)),
    FieldRule("CompanyAddresses", matches(p.ADDRESS)),
    FieldRule("LegalForms", matches(p.LEGAL_FORM)),
    FieldRule("CapitalAmounts", amounts(p.CAPITAL_AMOUNT)),
    FieldRule("RegistrationDates", matches(p.REGISTRATION_DATE)),
    FieldRule("DeliveredDates", matches(p.DELIVERED_DATE)),
    FieldRule("CompanyDuration", matches(p.COMPANY_DURATION)),
    FieldRule("TribunalNames", matches(p.TRIBUNAL)),
    FieldRule("ActivityCodes", matches(p.ACTIVITY_CODE)),
    FieldRule("TaxAttestationNumbers", _TAX_ATTESTATION_NUMBERS),
    FieldRule("TaxCenters", matches(p.TAX_CENTER)),
    FieldRule("TaxSystems", matches(p.TAX_SYSTEM)),
    FieldRule("AcfeReferences", matches(p.ACFE_REFERENCE)),
    FieldRule("DocumentLocationsAndDates", _LOCATIONS_AND_DATES),
    FieldRule("Quarters", matches(p.QUARTER)),
    FieldRule("PhoneNumbers", matches(p.PHONE)),
    FieldRule("EmailAddresses", _EMAILS),
    FieldRule("Regimes", matches(p.REGIME)),
)

EXTRACTION_PLANS: Mapping[DocumentType, tuple[FieldRule, ...]] = MappingProxyType(
    {
        DocumentType.FORMULAIRE_AGREGE_OM: FORMULAIRE_AGREGE_OM_PLAN,
        DocumentType.CNI_OR_RECIPICE: CNI_OR_RECIPICE_PLAN,
        DocumentType.REGISTRE_COMMERCE: REGISTRE_COMMERCE_PLAN,
        DocumentType.CARTE_CONTRIBUABLE_VALIDE: CARTE_CONTRIBUABLE_PLAN,
        DocumentType.ATTESTATION_FISCALE: ATTESTATION_FISCALE_PLAN,
    }
)


class FieldExtractor:
    """Runs the extraction plan of a document type against OCR text.

    A failing rule is logged and yields an empty list; the remaining rules
    still run, so one malformed field never costs the whole document.

    Args:
        plans: Extraction plan per document type.
        fallback_plan: Plan used for ``UNKNOWN`` and unmapped types.
    """

    def __init__(
        self,
        plans: Mapping[DocumentType, tuple[FieldRule, ...]] = EXTRACTION_PLANS,
        fallback_plan: tuple[FieldRule, ...] = GENERIC_PLAN,
    ) -> None:
        self.plans = plans
        self.fallback_plan = fallback_plan

    def extract_fields(
        self, raw_text: str, document_type: DocumentType
    ) -> dict[str, list[str]]:
        """Extract every field of the document type's plan.

        Args:
            raw_text: OCR output, possibly multi-page.
            document_type: Detected or caller-supplied document type.

        Returns:
            Mapping of field name to unique values in first-match order.
            Every field of the plan is present, even when empty.
        """
        text = raw_text or ""
        plan = self.plans.get(document_type, self.fallback_plan)

        fields: dict[str, list[str]] = {}
        for rule in plan:
            fields[rule.field_name] = self._run_rule(rule, text)

        found = sum(1 for values in fields.values() if values)
        logger.info(
            "Extracted %d/%d fields for document type %s",
            found,
            len(fields),
            document_type,
        )
        return fields

    def _run_rule(self, rule: FieldRule, text: str) -> list[str]:
        try:
            return rule.extract(text)
        except Exception as exc:
            logger.warning("Extraction failed for field %s: %s", rule.field_name, exc)
            return []


def is_field_valid_for_document_type(field_name: str, document_type: DocumentType) -> bool:
    """Check whether a field belongs to the displayed schema of a type."""
    return field_name in get_fields_for_document_type(document_type)
