import re
from urllib.parse import urlparse

from app.schemas.extraction import Link, ScoredLink

_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

# Markdown link title, e.g. (/path "Title")
_TRAILING_TITLE_RE = re.compile(r"""\s*["'][^"']*["']\s*$""")
_TRAILING_QUOTES_RE = re.compile(r"""["'\s]+$""")

_ABSOLUTE_URL_RE = re.compile(r"^https?://", re.IGNORECASE)
_BASE_URL_RE = re.compile(r"^(https?://[^/]+)", re.IGNORECASE)

# Checked in order; only the first hit scores
DEFAULT_CONTACT_KEYWORDS = (
    r"contact", r"get.?in.?touch", r"reach.?us", r"write.?us", r"talk.?to.?us",
    # sk
    r"kontakt", r"napíšte.?nám", r"spojte.?sa", r"kontaktujte",
    # cz
    r"napište.?nám", r"spojte.?se",
    # hu
    r"kapcsolat", r"elérhetőség", r"írjon.?nekünk", r"keressen.?minket",
    r"about.?us", r"impressum", r"rólunk", r"o.?nás",
)

_CONTACT_PATH_RE = re.compile(
    r"/(contact|kontakt|kapcsolat|elérhetőség|elerhetoseg|impressum)",
    re.IGNORECASE,
)

KEYWORD_SCORE = 10
PATH_SCORE = 15


def get_base_url(url: str) -> str:
    """scheme://host of an absolute URL, or "" when there is none."""
    if not url:
        return ""
    try:
        parsed = urlparse(url)
    except ValueError:
        parsed = None
    if parsed and parsed.scheme and parsed.netloc:
        return f"{parsed.scheme}://{parsed.netloc}"
    match = _BASE_URL_RE.match(url)
    return match.group(1) if match else ""


def clean_url(raw_url: str, base_url: str = "") -> str:
    """Strip stray quotes left over from conversion and resolve against base_url."""
    if not raw_url:
        return ""
    cleaned = _TRAILING_TITLE_RE.sub("", raw_url).strip()
    cleaned = _TRAILING_QUOTES_RE.sub("", cleaned).strip()

    if _ABSOLUTE_URL_RE.match(cleaned):
        return cleaned

    base = get_base_url(base_url)
    if not base:
        return cleaned
    if cleaned.startswith("//"):
        return "https:" + cleaned
    if cleaned.startswith("/"):
        return base + cleaned
    return base + "/" + cleaned


def extract_links(markdown: str, base_url: str = "") -> list[Link]:
    """All [text](url) links, resolved and deduplicated by URL."""
    if not markdown:
        return []

    links: list[Link] = []
    seen_urls: set[str] = set()
    for text, raw_url in _LINK_RE.findall(markdown):
        url = clean_url(raw_url, base_url)
        if url in seen_urls:
            continue
        seen_urls.add(url)
        links.append(Link(text=text, url=url))
    return links


def score_link(link: Link, keywords: tuple[str, ...] | list[str] = DEFAULT_CONTACT_KEYWORDS) -> ScoredLink:
    score = 0
    reasons: list[str] = []
    haystack = f"{link.text} {link.url}".lower()

    for keyword in keywords:
        if re.search(keyword, haystack, re.IGNORECASE):
            score += KEYWORD_SCORE
            reasons.append(f"Pattern: {keyword}")
            break

    if _CONTACT_PATH_RE.search(link.url.lower()):
        score += PATH_SCORE
        reasons.append("URL path match")

    return ScoredLink(link=link, score=score, reasons=reasons)


def find_contact_links(
    markdown: str,
    base_url: str = "",
    keywords: tuple[str, ...] | list[str] = DEFAULT_CONTACT_KEYWORDS,
) -> list[ScoredLink]:
    """Contact-page candidates, best first. Zero-score links are dropped."""
    scored = [score_link(link, keywords) for link in extract_links(markdown, base_url)]
    candidates = [item for item in scored if item.score > 0]
    # sorted() is stable: equal scores keep discovery order
    return sorted(candidates, key=lambda item: item.score, reverse=True)
