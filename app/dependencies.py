from typing import Annotated

from fastapi import Depends, Request

from app.services.scraper import ScraperService


def get_scraper_service(request: Request) -> ScraperService:
    return request.app.state.scraper_service


ScraperDep = Annotated[ScraperService, Depends(get_scraper_service)]
