"""Document metadata record and its field vocabulary.

Every vocabulary field is always present on a ``DocumentMetadata``; values
outside a document type's schema are empty rather than absent.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field, replace
from operator import attrgetter
from types import MappingProxyType
from typing import NamedTuple


class FieldAccessor(NamedTuple):
    """Binds a vocabulary field name to its attribute on ``DocumentMetadata``."""

    name: str
    attribute: str
    get: Callable[["DocumentMetadata"], object]
    zero: Callable[[], object]


# Fields that describe the document itself rather than extracted content.
IDENTITY_FIELDS: tuple[str, ...] = ("DocumentName", "DocumentType", "RawText")

# Extracted list fields, in output order.
LIST_FIELDS: tuple[str, ...] = (
    "NiuNumbers",
    "RccmNumbers",
    "BusinessNames",
    "Dates",
    "RegistrationNumbers",
    "CompanyAddresses",
    "LegalForms",
    "CapitalAmounts",
    "RegistrationDates",
    "DeliveredDates",
    "CompanyDuration",
    "TribunalNames",
    "ActivityCodes",
    "TaxAttestationNumbers",
    "TaxCenters",
    "TaxSystems",
    "AcfeReferences",
    "DocumentLocationsAndDates",
    "Quarters",
    "PhoneNumbers",
    "EmailAddresses",
    "Regimes",
    "PromoterNames",
    "MinDailyRevenue",
    "MaxDailyRevenue",
    "Name",
    "Surname",
    "BirthDate",
    "Profession",
)


@dataclass(frozen=True)
class DocumentMetadata:
    """Structured metadata extracted from one document."""

    document_name: str = ""
    document_type: str = ""
    niu_numbers: list[str] = field(default_factory=list)
    rccm_numbers: list[str] = field(default_factory=list)
    business_names: list[str] = field(default_factory=list)
    dates: list[str] = field(default_factory=list)
    registration_numbers: list[str] = field(default_factory=list)
    company_addresses: list[str] = field(default_factory=list)
    legal_forms: list[str] = field(default_factory=list)
    capital_amounts: list[str] = field(default_factory=list)
    registration_dates: list[str] = field(default_factory=list)
    delivered_dates: list[str] = field(default_factory=list)
    company_duration: list[str] = field(default_factory=list)
    tribunal_names: list[str] = field(default_factory=list)
    activity_codes: list[str] = field(default_factory=list)
    tax_attestation_numbers: list[str] = field(default_factory=list)
    tax_centers: list[str] = field(default_factory=list)
    tax_systems: list[str] = field(default_factory=list)
    acfe_references: list[str] = field(default_factory=list)
    document_locations_and_dates: list[str] = field(default_factory=list)
    quarters: list[str] = field(default_factory=list)
    phone_numbers: list[str] = field(default_factory=list)
    email_addresses: list[str] = field(default_factory=list)
    regimes: list[str] = field(default_factory=list)
    promoter_names: list[str] = field(default_factory=list)
    min_daily_revenue: list[str] = field(default_factory=list)
    max_daily_revenue: list[str] = field(default_factory=list)
    name: list[str] = field(default_factory=list)
    surname: list[str] = field(default_factory=list)
    birth_date: list[str] = field(default_factory=list)
    profession: list[str] = field(default_factory=list)
    raw_text: str = ""

    def get_field(self, field_name: str) -> object:
        """Return a value by vocabulary name (``KeyError`` if unknown)."""
        return FIELD_ACCESSORS[field_name].get(self)

    def with_fields(self, values: dict[str, object]) -> "DocumentMetadata":
        """Return a copy with the given vocabulary fields replaced.

        List values are copied, so the new record never shares a list with
        the caller or with ``self``.
        """
        unknown = set(values).difference(FIELD_ACCESSORS)
        if unknown:
            raise KeyError(sorted(unknown)[0])
        changes = {
            accessor.attribute: _copy_value(values.get(name, accessor.get(self)))
            for name, accessor in FIELD_ACCESSORS.items()
        }
        return replace(self, **changes)

    def iter_fields(self) -> Iterator[tuple[str, object]]:
        """Yield ``(vocabulary name, value)`` for every field in output order."""
        for accessor in FIELD_ACCESSORS.values():
            yield accessor.name, accessor.get(self)

    def to_dict(self) -> dict[str, object]:
        """Serialize with snake_case keys, one per attribute."""
        return {
            accessor.attribute: _copy_value(accessor.get(self))
            for accessor in FIELD_ACCESSORS.values()
        }


def _snake_case(name: str) -> str:
    chars: list[str] = []
    for i, char in enumerate(name):
        if char.isupper() and i > 0:
            chars.append("_")
        chars.append(char.lower())
    return "".join(chars)


def _copy_value(value: object) -> object:
    return list(value) if isinstance(value, list) else value


def _build_accessors() -> MappingProxyType:
    accessors: dict[str, FieldAccessor] = {}
    ordered = ("DocumentName", "DocumentType", *LIST_FIELDS, "RawText")
    for name in ordered:
        attribute = _snake_case(name)
        zero = str if name in IDENTITY_FIELDS else list
        accessors[name] = FieldAccessor(name, attribute, attrgetter(attribute), zero)
    return MappingProxyType(accessors)


FIELD_ACCESSORS: MappingProxyType = _build_accessors()

ALL_FIELDS: frozenset[str] = frozenset(FIELD_ACCESSORS)


def has_non_empty_value(value: object) -> bool:
    """Return ``True`` for non-blank strings and non-empty lists."""
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, list):
        return bool(value)
    return value is not None
