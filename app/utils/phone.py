import re

COUNTRY_CODE = "55"
DEFAULT_AREA_CODE = "11"

_NON_DIGITS = re.compile(r"[^0-9]")
_CODE_PATTERN = re.compile(r"[0-9]{6}")


def normalize_phone(phone: str) -> str:
    """
    Convert a user-typed Brazilian phone number to +55<area><subscriber>.

    Lenient on purpose: malformed input still produces a "+55..." string and
    the provider is the one that rejects it.
    """
    numbers = _NON_DIGITS.sub("", phone or "")

    if numbers.startswith("0"):
        numbers = numbers[1:]

    if not numbers.startswith(COUNTRY_CODE):
        if len(numbers) in (10, 11):
            numbers = COUNTRY_CODE + numbers
        elif len(numbers) == 9:
            numbers = COUNTRY_CODE + DEFAULT_AREA_CODE + numbers
        else:
            numbers = COUNTRY_CODE + numbers

    return "+" + numbers


def is_valid_code(code) -> bool:
    """True for exactly six ASCII digits."""
    return isinstance(code, str) and _CODE_PATTERN.fullmatch(code) is not None


def mask_phone(phone: str) -> str:
    """Keep the country and area code, hide the subscriber number."""
    if not phone:
        return ""
    if len(phone) <= 7:
        return "*" * len(phone)
    return phone[:5] + "*" * (len(phone) - 7) + phone[-2:]
