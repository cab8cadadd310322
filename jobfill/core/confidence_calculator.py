"""
Confidence scoring for form-field classification.

Confidence is computed after, and independently of, the category decision. It
tells the autofill shell whether to trust the decision or ask the candidate to
review the field.

Confidence Scale:
  1.0   = Several independent signals agree (label binding, input type, autocomplete)
  0.8   = Explicitly bound label that names the field
  0.5   = Baseline for any decision at all
  0.0   = unknown/unknown, no decision was made

Boosts are additive and independent; the total saturates at 1.0.
"""

from typing import Dict, List, Tuple

from jobfill.core.schemas import FieldMetadata


BASELINE = 0.5

LABEL_FOR_BOOST = 0.3
INPUT_TYPE_BOOST = 0.3
AUTOCOMPLETE_BOOST = 0.3
SUBCATEGORY_IN_ID_BOOST = 0.2
REQUIRED_WITH_LABEL_BOOST = 0.1
OPTION_SENTINEL_BOOST = 0.2

# Site adapter overlay boosts
SITE_STRUCTURE_BOOST = 0.15
STANDARD_FIELD_BOOST = 0.2

# subcategory -> input type that corroborates it
INPUT_TYPE_MATCHES: Dict[str, str] = {
    "email": "email",
    "phone": "tel",
}

# subcategory -> autocomplete tokens that corroborate it
AUTOCOMPLETE_MATCHES: Dict[str, Tuple[str, ...]] = {
    "firstName": ("given-name",),
    "lastName": ("family-name",),
    "middleName": ("additional-name",),
    "name": ("name",),
    "email": ("email",),
    "phone": ("tel", "tel-national"),
    "address": ("street-address", "address-line1", "address-line2", "address-line3"),
    "city": ("address-level2",),
    "state": ("address-level1",),
    "zipCode": ("postal-code",),
    "country": ("country", "country-name"),
    "company": ("organization",),
    "title": ("organization-title",),
    "website": ("url",),
}

# subcategory -> option texts expected somewhere in its dropdown
OPTION_SENTINELS: Dict[str, Tuple[str, ...]] = {
    "country": ("united states",),
    "state": ("california",),
    "degree": ("bachelor", "master", "phd"),
}


def clamp(confidence: float) -> float:
    return round(max(0.0, min(1.0, confidence)), 3)


class ConfidenceCalculator:
    """Central place for all classification confidence logic."""

    @staticmethod
    def field_classification(
        metadata: FieldMetadata,
        category: str,
        subcategory: str,
    ) -> Tuple[float, List[str]]:
        """
        Calculate confidence for a (category, subcategory) decision.

        Factors:
          + Label bound through label[for=id] (strong signal)
          + Native input type agrees (email, tel)
          + Browser autocomplete token agrees
          + Subcategory name appears in id/name
          + Required field with a visible label
          + Dropdown options contain an expected value

        Returns the confidence and the reasons that contributed to it.
        """
        if category == "unknown":
            return 0.0, ["no_decision"]

        confidence = BASELINE
        reasons = ["baseline"]

        if metadata.label_for_field:
            confidence += LABEL_FOR_BOOST
            reasons.append("label_for_binding")

        if INPUT_TYPE_MATCHES.get(subcategory) == metadata.type and metadata.type:
            confidence += INPUT_TYPE_BOOST
            reasons.append("input_type_match")

        if metadata.autocomplete and metadata.autocomplete in AUTOCOMPLETE_MATCHES.get(subcategory, ()):
            confidence += AUTOCOMPLETE_BOOST
            reasons.append("autocomplete_match")

        if _subcategory_in_identifiers(metadata, subcategory):
            confidence += SUBCATEGORY_IN_ID_BOOST
            reasons.append("subcategory_in_id")

        if metadata.required and metadata.label_text:
            confidence += REQUIRED_WITH_LABEL_BOOST
            reasons.append("required_with_label")

        sentinels = OPTION_SENTINELS.get(subcategory, ())
        if metadata.options and any(s in option for option in metadata.options for s in sentinels):
            confidence += OPTION_SENTINEL_BOOST
            reasons.append("option_sentinel")

        return clamp(confidence), reasons

    @staticmethod
    def boost(confidence: float, *boosts: float) -> float:
        """Add overlay boosts to a confidence, saturating at 1.0."""
        return clamp(confidence + sum(boosts))


def _subcategory_in_identifiers(metadata: FieldMetadata, subcategory: str) -> bool:
    needle = subcategory.lower()
    for ident in (metadata.id, metadata.name):
        if not ident:
            continue
        if needle in ident or needle in ident.replace("_", "").replace("-", ""):
            return True
    return False
