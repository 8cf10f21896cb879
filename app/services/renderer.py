import logging

from playwright.async_api import Browser, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from app.exceptions.custom import RenderError
from app.extractors.markdown import HIDDEN_MARKER, html_to_markdown
from app.schemas.extraction import NormalizedDocument

logger = logging.getLogger(__name__)

# Computed style is only known inside the page, so flag hidden elements
# before taking the HTML snapshot.
_MARK_HIDDEN_JS = """(marker) => {
    for (const el of document.body ? document.body.querySelectorAll('*') : []) {
        const style = window.getComputedStyle(el);
        if (style.display === 'none' || style.visibility === 'hidden') {
            el.setAttribute(marker, '');
        }
    }
}"""


class PlaywrightRenderer:
    def __init__(
        self,
        headless: bool = True,
        browser_args: list[str] | None = None,
        navigation_timeout_ms: int = 30_000,
        settle_delay_ms: int = 2_000,
    ):
        self._headless = headless
        self._browser_args = browser_args or []
        self._navigation_timeout_ms = navigation_timeout_ms
        self._settle_delay_ms = settle_delay_ms
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None

    @property
    def ready(self) -> bool:
        return self._browser is not None

    async def start(self) -> None:
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=self._headless,
            args=self._browser_args,
        )
        logger.info("Browser initialized")

    async def close(self) -> None:
        if self._browser:
            await self._browser.close()
        if self._playwright:
            await self._playwright.stop()
        self._browser = None
        self._playwright = None
        logger.info("Browser closed")

    async def render(self, url: str, full_page: bool = False) -> NormalizedDocument:
        """Load url and return its markdown. Raises RenderError on any navigation failure."""
        if self._browser is None:
            raise RenderError("Browser not initialized", url)

        page = await self._browser.new_page()
        try:
            await page.goto(url, timeout=self._navigation_timeout_ms, wait_until="domcontentloaded")
            await page.wait_for_timeout(self._settle_delay_ms)
            await page.evaluate(_MARK_HIDDEN_JS, HIDDEN_MARKER)
            html = await page.content()
        except PlaywrightError as exc:
            raise RenderError(exc.message, url) from exc
        finally:
            await page.close()

        return NormalizedDocument(url=url, text=html_to_markdown(html, full_page=full_page))
