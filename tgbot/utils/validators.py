import re

EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


def is_empty_or_whitespace(text: str | None) -> bool:
    return not text or not text.strip()


def has_min_length(text: str | None, min_length: int) -> bool:
    """Check the length of the text once surrounding whitespace is removed."""
    return text is not None and len(text.strip()) >= min_length


def is_valid_email(email: str | None) -> bool:
    if not email:
        return False
    return bool(EMAIL_RE.fullmatch(email))
