import re

# Applied in order.
_NOISE_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\s+"), " "),
    (re.compile(r"https?://[^\s)]+"), " "),
    (re.compile(r"!\[[^\]]*\]\([^)]+\)"), " "),
    (re.compile(r"\b\d{4}[-/.]\d{1,2}[-/.]\d{1,2}\b"), " "),
    (re.compile(r"\b\d{1,2}[-/.]\d{1,2}[-/.]\d{4}\b"), " "),
    (re.compile(r"\b\d{1,2}:\d{2}(?::\d{2})?\b"), " "),
    (re.compile(r"[$€£]\s?\d+[\d\s,.]*\b"), " "),
    (re.compile(r"\s*[-–—]\s*"), "-"),
    (re.compile(r"\s*/\s*"), "/"),
)


def preprocess_text(text: str) -> str:
    """Strip URLs, images, dates, times and money amounts before phone matching."""
    for pattern, replacement in _NOISE_PATTERNS:
        text = pattern.sub(replacement, text)
    return text.strip()
