import re

from ..schemas.identity_schemas import NormalizedPhone

PHONE_SUFFIX_LENGTH = 10

_NON_DIGITS = re.compile(r"[^0-9]")


def normalize_phone(raw: str | None) -> NormalizedPhone:
    """
    Canonicalize a sender identifier such as ``whatsapp:+1 (917) 555-1234``.

    ``canonical`` keeps every digit in order; ``suffix`` is the trailing
    ten digits used to compare numbers stored with or without a country
    code. Short inputs are returned as-is, neither padded nor rejected.
    """
    canonical = _NON_DIGITS.sub("", raw or "")
    return NormalizedPhone(
        canonical=canonical,
        suffix=canonical[-PHONE_SUFFIX_LENGTH:],
    )


def mask_phone(phone: str | None) -> str:
    if not phone:
        return ""
    return f"***{phone[-4:]}"
