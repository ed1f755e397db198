"""Display Names — derive a user's display name from optional identity hints."""

DEFAULT_DISPLAY_NAME = "User"


def derive_display_name(name_hint: str | None, email_hint: str | None) -> str:
    """Prefer the name hint, then the email local part, then a placeholder.

    Blank hints count as absent.
    """
    if name_hint and name_hint.strip():
        return name_hint.strip()
    if email_hint and email_hint.strip():
        local_part = email_hint.strip().split("@", 1)[0]
        if local_part:
            return local_part
    return DEFAULT_DISPLAY_NAME


def clean_email(email_hint: str | None) -> str | None:
    if email_hint and email_hint.strip():
        return email_hint.strip()
    return None
