import logging
from typing import Annotated

from fastapi import APIRouter, Header, HTTPException

from app.dependencies import ScraperDep
from app.exceptions.custom import InvalidRequestError
from app.schemas.scrape import HealthResponse, ScrapeRequest, ScrapeResponse
from app.services.scraper import MODES

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/scrape", response_model=ScrapeResponse)
async def scrape(
    service: ScraperDep,
    request: ScrapeRequest | None = None,
    x_mode: Annotated[str | None, Header()] = None,
    mode: Annotated[str | None, Header()] = None,
) -> ScrapeResponse:
    urls = request.urls if request else None
    if not urls or any(not url.strip() for url in urls):
        raise InvalidRequestError("Provide a non-empty urls array in body")

    selected = x_mode or mode or "contact"
    if selected not in MODES:
        raise InvalidRequestError('Invalid mode. Use "contact" or "content"')

    try:
        results = await service.run(urls, mode=selected)
    except Exception:
        logger.exception("Scrape batch failed (%d URLs, mode=%s)", len(urls), selected)
        raise HTTPException(status_code=500, detail="Internal server error")

    return ScrapeResponse(mode=selected, count=len(results), results=results)


@router.get("/health", response_model=HealthResponse)
async def health(service: ScraperDep) -> HealthResponse:
    return HealthResponse(status="ok", browser_ready=service.browser_ready, modes=list(MODES))
