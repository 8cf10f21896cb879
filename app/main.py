import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from app.config import Settings
from app.exceptions.custom import InvalidRequestError
from app.exceptions.handlers import (
    invalid_request_error_handler,
    request_validation_error_handler,
)
from app.routers.scrape import router as scrape_router
from app.services.renderer import PlaywrightRenderer
from app.services.scraper import ScraperService


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )

    renderer = PlaywrightRenderer(
        headless=settings.browser_headless,
        browser_args=settings.browser_args,
        navigation_timeout_ms=settings.navigation_timeout_ms,
        settle_delay_ms=settings.settle_delay_ms,
    )
    await renderer.start()

    app.state.scraper_service = ScraperService(
        renderer,
        cooldown_seconds=settings.url_cooldown_seconds,
        email_blocked_fragments=settings.email_blocked_fragments,
        contact_keywords=settings.contact_keywords,
    )

    try:
        yield
    finally:
        await renderer.close()


app = FastAPI(title="Contact Scraper", lifespan=lifespan)

app.add_exception_handler(InvalidRequestError, invalid_request_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_error_handler)

app.include_router(scrape_router)
