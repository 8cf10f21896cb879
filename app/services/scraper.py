import asyncio
import logging

from app.exceptions.custom import RenderError
from app.extractors.emails import DEFAULT_BLOCKED_FRAGMENTS, extract_emails
from app.extractors.links import DEFAULT_CONTACT_KEYWORDS, find_contact_links
from app.extractors.phones import extract_phones
from app.extractors.preprocess import preprocess_text
from app.schemas.extraction import NormalizedDocument, PhoneBreakdown
from app.schemas.scrape import ContactResult, ContentResult
from app.services.renderer import PlaywrightRenderer

logger = logging.getLogger(__name__)

MODES = ("contact", "content")


class ScraperService:
    """Sequential scraping over a URL list.

    Contact mode falls back to at most one contact page per URL, so each
    URL costs at most two renders.
    """

    def __init__(
        self,
        renderer: PlaywrightRenderer,
        cooldown_seconds: float = 0.5,
        email_blocked_fragments: list[str] | tuple[str, ...] = DEFAULT_BLOCKED_FRAGMENTS,
        contact_keywords: list[str] | tuple[str, ...] = DEFAULT_CONTACT_KEYWORDS,
    ):
        self._renderer = renderer
        self._cooldown_seconds = cooldown_seconds
        self._email_blocked_fragments = tuple(email_blocked_fragments)
        self._contact_keywords = tuple(contact_keywords)

    @property
    def browser_ready(self) -> bool:
        return self._renderer.ready

    def extract_contacts(self, document: NormalizedDocument) -> tuple[list[str], PhoneBreakdown]:
        cleaned = preprocess_text(document.text)
        phones = extract_phones(cleaned)
        emails = extract_emails(cleaned, self._email_blocked_fragments)
        return emails, phones

    async def run(self, urls: list[str], mode: str = "contact") -> list[ContactResult] | list[ContentResult]:
        logger.info("Processing %d URLs in %s mode", len(urls), mode)
        if mode == "content":
            return await self.run_content(urls)
        return await self.run_contact(urls)

    async def run_contact(self, urls: list[str]) -> list[ContactResult]:
        results: list[ContactResult] = []
        for url in urls:
            result = await self._process_contact_url(url)
            logger.info(
                "%s: source=%s depth=%d emails=%d phones=%d",
                url, result.source, result.depth, result.count_emails, result.count_phones,
            )
            results.append(result)
            await asyncio.sleep(self._cooldown_seconds)
        return results

    async def run_content(self, urls: list[str]) -> list[ContentResult]:
        results: list[ContentResult] = []
        for url in urls:
            try:
                document = await self._renderer.render(url, full_page=False)
            except RenderError as exc:
                logger.warning("Failed to render %s: %s", url, exc.message)
                results.append(ContentResult(url=url, success=False, error=exc.message))
            else:
                results.append(ContentResult(
                    url=url,
                    success=True,
                    markdown=document.text,
                    content_length=len(document.text),
                ))
            await asyncio.sleep(self._cooldown_seconds)
        return results

    async def _process_contact_url(self, url: str) -> ContactResult:
        try:
            primary = await self._renderer.render(url, full_page=True)
        except RenderError as exc:
            logger.warning("Failed to render %s: %s", url, exc.message)
            return ContactResult(url=url, success=False, error=exc.message, depth=0)

        emails, phones = self.extract_contacts(primary)
        if emails or phones.all:
            return _contact_result(url, emails, phones, depth=0, source="main_page")

        candidates = find_contact_links(primary.text, url, self._contact_keywords)
        if not candidates:
            return ContactResult(url=url, success=True, depth=0, source="no_contacts_found")

        best = candidates[0]
        contact_url = best.link.url
        logger.debug("No contacts on %s, trying %s (score=%d)", url, contact_url, best.score)

        try:
            secondary = await self._renderer.render(contact_url, full_page=True)
        except RenderError as exc:
            logger.warning("Failed to render contact page %s: %s", contact_url, exc.message)
            return ContactResult(
                url=url,
                success=True,
                depth=1,
                source="contact_page_failed",
                contact_page_url=contact_url,
                error=exc.message,
            )

        emails, phones = self.extract_contacts(secondary)
        return _contact_result(
            url, emails, phones,
            depth=1,
            source="contact_page",
            contact_page_url=contact_url,
            contact_page_score=best.score,
        )


def _contact_result(
    url: str,
    emails: list[str],
    phones: PhoneBreakdown,
    depth: int,
    source: str,
    contact_page_url: str | None = None,
    contact_page_score: int | None = None,
) -> ContactResult:
    return ContactResult(
        url=url,
        success=True,
        emails="; ".join(emails),
        phones="; ".join(p.number for p in phones.all),
        phones_detailed=phones,
        count_emails=len(emails),
        count_phones=len(phones.all),
        depth=depth,
        source=source,
        contact_page_url=contact_page_url,
        contact_page_score=contact_page_score,
    )
