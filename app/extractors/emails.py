import re

_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}")

_LONG_DIGIT_RUN_RE = re.compile(r"\d{6,}")

# Placeholder and third-party service domains (substring match)
DEFAULT_BLOCKED_FRAGMENTS = (
    "example.com",
    "domain.com",
    "sentry.io",
    "wixpress.com",
)

_IMAGE_SUFFIXES = (".png", ".jpg", ".svg")


def _is_placeholder(email: str) -> bool:
    """your-name@email.com and friends."""
    return email.startswith("your") and "email.com" in email


def is_blocked_email(email: str, blocked_fragments: tuple[str, ...] | list[str] = DEFAULT_BLOCKED_FRAGMENTS) -> bool:
    """Check if a lowercased candidate address should be filtered out."""
    if any(fragment in email for fragment in blocked_fragments):
        return True
    if _is_placeholder(email):
        return True
    if _LONG_DIGIT_RUN_RE.search(email):
        return True
    return email.endswith(_IMAGE_SUFFIXES)


def extract_emails(
    text: str,
    blocked_fragments: tuple[str, ...] | list[str] = DEFAULT_BLOCKED_FRAGMENTS,
) -> list[str]:
    """Lowercased, deduplicated addresses in order of first appearance."""
    seen: set[str] = set()
    emails: list[str] = []

    for match in _EMAIL_RE.findall(text):
        email = match.lower()
        if email in seen or is_blocked_email(email, blocked_fragments):
            continue
        seen.add(email)
        emails.append(email)

    return emails
