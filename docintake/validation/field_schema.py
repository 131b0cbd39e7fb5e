"""Per-document-type field schemas.

Two independent read-only tables: the fields displayed for a document type
and the critical fields whose absence makes an extraction invalid. A
critical field is not required to appear in the displayed set.
"""

from types import MappingProxyType

from docintake.classification.document_types import DocumentType
from docintake.metadata.models import ALL_FIELDS

_SCHEMAS = MappingProxyType(
    {
        DocumentType.FORMULAIRE_AGREGE_OM: frozenset(
            {
                "DocumentName",
                "DocumentType",
                "RawText",
                "BusinessNames",
                "PromoterNames",
                "RegistrationNumbers",
                "CompanyAddresses",
                "LegalForms",
                "CapitalAmounts",
                "ActivityCodes",
                "PhoneNumbers",
                "EmailAddresses",
                "MinDailyRevenue",
                "MaxDailyRevenue",
            }
        ),
        DocumentType.CNI_OR_RECIPICE: frozenset(
            {
                "DocumentName",
                "DocumentType",
                "RawText",
                "Name",
                "Surname",
                "BirthDate",
                "Profession",
                "RegistrationNumbers",
                "Dates",
                "DocumentLocationsAndDates",
            }
        ),
        DocumentType.REGISTRE_COMMERCE: frozenset(
            {
                "DocumentName",
                "DocumentType",
                "RawText",
                "RccmNumbers",
                "BusinessNames",
                "RegistrationNumbers",
                "CompanyAddresses",
                "LegalForms",
                "CapitalAmounts",
                "RegistrationDates",
                "DeliveredDates",
                "CompanyDuration",
                "TribunalNames",
                "ActivityCodes",
                "Quarters",
                "PhoneNumbers",
                "EmailAddresses",
            }
        ),
        DocumentType.CARTE_CONTRIBUABLE_VALIDE: frozenset(
            {
                "DocumentName",
                "DocumentType",
                "RawText",
                "NiuNumbers",
                "BusinessNames",
                "TaxAttestationNumbers",
                "TaxCenters",
                "TaxSystems",
                "CompanyAddresses",
                "Quarters",
                "PhoneNumbers",
                "EmailAddresses",
                "Regimes",
            }
        ),
        DocumentType.ATTESTATION_FISCALE: frozenset(
            {
                "DocumentName",
                "DocumentType",
                "RawText",
                "NiuNumbers",
                "BusinessNames",
                "Dates",
                "TaxAttestationNumbers",
                "TaxCenters",
                "TaxSystems",
                "AcfeReferences",
                "CompanyAddresses",
                "Quarters",
                "PhoneNumbers",
                "EmailAddresses",
                "Regimes",
                "DocumentLocationsAndDates",
            }
        ),
    }
)

_CRITICAL_FIELDS = MappingProxyType(
    {
        DocumentType.FORMULAIRE_AGREGE_OM: frozenset({"BusinessNames", "RegistrationNumbers"}),
        DocumentType.CNI_OR_RECIPICE: frozenset({"RegistrationNumbers"}),
        DocumentType.REGISTRE_COMMERCE: frozenset({"RccmNumbers", "BusinessNames"}),
        DocumentType.CARTE_CONTRIBUABLE_VALIDE: frozenset({"NiuNumbers", "BusinessNames"}),
        DocumentType.ATTESTATION_FISCALE: frozenset({"TaxAttestationNumbers", "BusinessNames"}),
    }
)


def get_all_fields() -> frozenset[str]:
    """Return the complete field vocabulary, identity fields included."""
    return ALL_FIELDS


def has_schema(document_type: DocumentType) -> bool:
    return document_type in _SCHEMAS


def get_fields_for_document_type(document_type: DocumentType) -> frozenset[str]:
    """Return the displayed field set for a document type.

    Types without a schema get the full vocabulary, meaning no filtering.
    """
    return _SCHEMAS.get(document_type, ALL_FIELDS)


def get_critical_fields_for_document_type(document_type: DocumentType) -> frozenset[str]:
    """Return the fields required for a valid extraction of this type."""
    return _CRITICAL_FIELDS.get(document_type, frozenset())
