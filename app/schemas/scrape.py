from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from app.schemas.extraction import PhoneBreakdown


class ScrapeRequest(BaseModel):
    urls: list[str] | None = None


class ContactResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    url: str
    success: bool
    emails: str = ""  # "; "-joined
    phones: str = ""  # "; "-joined canonical numbers
    phones_detailed: PhoneBreakdown | None = None
    count_emails: int = 0
    count_phones: int = 0
    depth: int = 0
    source: str | None = None  # "main_page" | "contact_page" | "contact_page_failed" | "no_contacts_found"
    contact_page_url: str | None = None
    contact_page_score: int | None = None
    error: str | None = None


class ContentResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    url: str
    success: bool
    markdown: str = ""
    content_length: int = 0
    error: str | None = None


class ScrapeResponse(BaseModel):
    mode: str
    count: int
    results: list[ContactResult] | list[ContentResult]


class HealthResponse(BaseModel):
    status: str
    browser_ready: bool
    modes: list[str]
