from myauth.errors import ValidationError


def normalize_email(email: str) -> str:
    """Trim and lowercase an email address.

    Requirements:
    - Not empty after trimming
    - Contains exactly one '@' with text on both sides

    Raises:
        ValidationError: If email is malformed
    """
    normalized = email.strip().lower()
    local, sep, domain = normalized.partition("@")
    if not sep or not local or not domain or "@" in domain:
        raise ValidationError(f"Invalid email address: '{email}'")
    if any(char.isspace() for char in normalized):
        raise ValidationError("Email cannot contain whitespace characters")
    return normalized
