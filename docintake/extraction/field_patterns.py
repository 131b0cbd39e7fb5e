"""Compiled regular expressions for business document fields.

Patterns target French-language Cameroonian regulatory documents: tax
cards, tax attestations, commercial registry extracts, identity cards and
mobile-money merchant enrollment forms. All patterns are module constants
shared read-only across threads.
"""

import re

# Generic patterns usable on any document.
DATE = re.compile(r"\b(\d{1,2}[/.-]\d{1,2}[/.-]\d{4})\b")
PHONE = re.compile(
    r"(?:Tél\s*fixe|Téléphone|Phone|Tel)\s*:?\s*(\d{9,15})", re.IGNORECASE
)
EMAIL_LABELED = re.compile(
    r"(?:Adresse électronique|e[\-\s]*mail|Email)\s*\(?[:\s]*\)?\s*"
    r"([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})?",
    re.IGNORECASE,
)
EMAIL_BARE = re.compile(r"\b[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\b")
REGISTRATION_NUMBER = re.compile(r"\b(\d{4}[A-Z]\d{8})\b")
ADDRESS = re.compile(r"ADRESSE DU SI[EÈ]GE\s*:\s*(.*?)(?=\n|$)", re.IGNORECASE)
LEGAL_FORM = re.compile(
    r"\b(SARL|SAS|SA|EURL|SNC|SCS|GIE"
    r"|(?i:Société Anonyme|Société à Responsabilité Limitée))\b"
)
QUARTER = re.compile(
    r"(?:Lieu[ -]Dit|Quarter|Quartier)\s*:?\s*([A-Z][A-Z \t-]+)(?:\s+B\.P\.?:?|$)",
    re.IGNORECASE | re.MULTILINE,
)
ACTIVITY_CODE = re.compile(
    r"(?:Code APE|Activité principale|Code NAF)[\s:]*(\d{4}[A-Z]?)", re.IGNORECASE
)
LOCATION_DATE = re.compile(
    r"\b([A-Z][A-Z \t-]*[A-Z]),?[ \t]+(?:le[ \t]+)?(\d{1,2}/\d{1,2}/\d{4})\b"
)

# Tax identifiers.
NIU = re.compile(r"\b([MP]\d{12}[A-Z])\b")
TAX_ATTESTATION_HEADER = re.compile(
    r"(?:ATTESTATION D'IMMATRICULATION|ATTESTATION OF TAXPAYERS REGISTRATION)"
    r"\s*(?:N°\s*:?\s*)?(\d+)",
    re.IGNORECASE,
)
GENERIC_NUMBER = re.compile(r"N°\s*:?\s*(\d+)", re.IGNORECASE)
TAX_CARD_NUMBER = re.compile(
    r"(?:N° Carte|Numéro Carte|Card Number)\s*:\s*(\d+)", re.IGNORECASE
)
TAX_CENTER = re.compile(
    r"Centre des impôts de rattachement\s*:\s*(.*?)(?=\n|Tax center|$)", re.IGNORECASE
)
TAX_SYSTEM = re.compile(
    r"Régime\s*fiscal\s*:\s*(.*?)(?=\n|Tax system|$)", re.IGNORECASE
)
REGIME = re.compile(r"\bREGIME\s*:\s*(.*?)(?=\n|$)", re.IGNORECASE)
ACFE_REFERENCE = re.compile(
    r"(?:R[ée]f[ée]rence\s+ACFE|ACFE)\s*:?\s*(\d+)", re.IGNORECASE
)

# Business names.
LABELED_BUSINESS_NAME = re.compile(
    r"(?:Dénomination|Raison sociale|Nom commercial)\s*:\s*(.*?)(?=\n|$)",
    re.IGNORECASE,
)
ATTESTATION_BUSINESS_NAME = re.compile(
    r"(?:Dénomination|Raison sociale|\bNom)\s*:\s*(.*?)(?=\n|$)", re.IGNORECASE
)
COMPANY_WITH_LEGAL_FORM = re.compile(
    r"\b([A-Z][A-Z&\- ]+(?:SARL|SAS|SA|EURL|SNC|SCS|GIE))\b"
)

# Commercial registry extracts.
RCCM = re.compile(r"\b(RC[/\s]*[A-Z]{3,}[/\s]*\d{4}[/\s]*[A-Z][/\s]*\d{4})\b")
CAPITAL_AMOUNT = re.compile(
    r"CAPITAL SOCIAL\s*:\s*(\d+(?:\.\d{3})*)\s*(FCFA|F CFA|€|EUR)", re.IGNORECASE
)
REGISTRATION_DATE = re.compile(
    r"(?:Date d'immatriculation|Immatriculé le|Date d'inscription)[\s:]*"
    r"(\d{1,2}[/.-]\d{1,2}[/.-]\d{4})",
    re.IGNORECASE,
)
DELIVERED_DATE = re.compile(
    r"Déposée? le\s*:?\s*(\d{1,2}/\d{1,2}/\d{4})", re.IGNORECASE
)
COMPANY_DURATION = re.compile(r"Durée\s*:\s*(\d+\s*ANS?)", re.IGNORECASE)
TRIBUNAL = re.compile(r"(?:Tribunal|Greffe)[ \t:]*([A-Z][A-Z \t-]+)", re.IGNORECASE)

# Identity cards and receipts.
PERSON_NAME = re.compile(r"\b(?:Nom|Surname)\s*:\s*(.*?)(?=\n|$)", re.IGNORECASE)
PERSON_SURNAME = re.compile(
    r"\b(?:Pr[ée]noms?|Given Names?)\s*:\s*(.*?)(?=\n|$)", re.IGNORECASE
)
BIRTH_DATE = re.compile(
    r"(?:Né\(?e?\)? le|Date de naissance|Born on|Birth Date)\s*:?\s*"
    r"(\d{1,2}[/.-]\d{1,2}[/.-]\d{4})",
    re.IGNORECASE,
)
PROFESSION = re.compile(
    r"(?:Profession|Métier|Occupation)\s*:\s*(.*?)(?=\n|$)", re.IGNORECASE
)
ID_CARD_NUMBER = re.compile(
    r"(?:N°|Numéro|Number)\s*:\s*(\d+[A-Z]?\d*)", re.IGNORECASE
)

# Mobile-money merchant enrollment forms.
AGREGE_BUSINESS_NAME = re.compile(
    r"Nom commercial / Raison sociale du Point Agrégé\s*\n(.*?)(?=\n|$)"
)
AGREGE_ADDRESS = re.compile(r"Localisation de l'activité\*?\s*\n(.*?)(?=\n|$)")
AGREGE_ACTIVITY = re.compile(
    r"Activité principale du Point accepteur agrégé'?\s*\n(.*?)(?=\n|$)"
)
AGREGE_PHONE = re.compile(r"Numéro de téléphone personnel[^\n]*\n([0-9][0-9 ]*)")
PROMOTER_NAME = re.compile(
    r"(?:Nom et prénom|Promoteur|Gérant)\s*:\s*(.*?)(?=\n|$)", re.IGNORECASE
)
MIN_DAILY_REVENUE = re.compile(
    r"(?:Chiffre d'affaires minimum|CA minimum|Min CA)\s*:\s*"
    r"(\d+(?:\.\d{3})*)\s*(FCFA|F CFA)",
    re.IGNORECASE,
)
MAX_DAILY_REVENUE = re.compile(
    r"(?:Chiffre d'affaires maximum|CA maximum|Max CA)\s*:\s*"
    r"(\d+(?:\.\d{3})*)\s*(FCFA|F CFA)",
    re.IGNORECASE,
)
