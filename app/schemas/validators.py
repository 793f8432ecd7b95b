from email_validator import EmailNotValidError, validate_email


def blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def check_length(value: str | None, label: str, max_length: int, required: bool = True) -> str | None:
    if value is None:
        if required:
            raise ValueError(f"{label} is required")
        return None
    if required and not value:
        raise ValueError(f"{label} is required")
    if len(value) > max_length:
        raise ValueError(f"{label} has a maximum of {max_length} characters")
    return value


def check_email(value: str | None, max_length: int = 255) -> str | None:
    if value is None:
        return None
    if len(value) > max_length:
        raise ValueError(f"Email has a maximum of {max_length} characters")
    try:
        return validate_email(value, check_deliverability=False).normalized
    except EmailNotValidError:
        raise ValueError("Please enter a valid email address")
