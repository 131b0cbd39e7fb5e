"""Document type enumeration and display names."""

from enum import StrEnum


class DocumentType(StrEnum):
    """Known categories of business documents."""

    UNKNOWN = "Unknown"
    FORMULAIRE_AGREGE_OM = "FormulaireAgregeOM"
    CNI_OR_RECIPICE = "CniOrRecipice"
    REGISTRE_COMMERCE = "RegistreCommerce"
    CARTE_CONTRIBUABLE_VALIDE = "CarteContribuabledValide"
    ATTESTATION_FISCALE = "AttestationFiscale"

    @classmethod
    def parse(cls, value: str | None) -> "DocumentType | None":
        """Resolve a caller-supplied type name, ignoring case.

        Args:
            value: Type name such as ``"registrecommerce"``.

        Returns:
            The matching document type, or ``None`` if blank or unrecognised.
        """
        if value is None or not value.strip():
            return None
        wanted = value.strip().lower()
        for member in cls:
            if member.value.lower() == wanted or member.name.lower() == wanted:
                return member
        return None


UNKNOWN_DISPLAY_NAME = "Document Type Unknown"
DEFAULT_DISPLAY_NAME = "Business Document"

DISPLAY_NAMES: dict[DocumentType, str] = {
    DocumentType.FORMULAIRE_AGREGE_OM: "Formulaire Agrégé OM",
    DocumentType.CNI_OR_RECIPICE: "CNI ou Récépissé",
    DocumentType.REGISTRE_COMMERCE: "Registre du Commerce",
    DocumentType.CARTE_CONTRIBUABLE_VALIDE: "Carte Contribuable Valide",
    DocumentType.ATTESTATION_FISCALE: "Attestation Fiscale",
    DocumentType.UNKNOWN: UNKNOWN_DISPLAY_NAME,
}
