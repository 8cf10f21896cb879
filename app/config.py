from pydantic_settings import BaseSettings

from app.extractors.emails import DEFAULT_BLOCKED_FRAGMENTS
from app.extractors.links import DEFAULT_CONTACT_KEYWORDS


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    log_level: str = "INFO"
    browser_headless: bool = True
    browser_args: list[str] = ["--disable-dev-shm-usage", "--no-sandbox", "--disable-gpu"]
    navigation_timeout_ms: int = 30_000
    settle_delay_ms: int = 2_000
    url_cooldown_seconds: float = 0.5
    email_blocked_fragments: list[str] = list(DEFAULT_BLOCKED_FRAGMENTS)
    contact_keywords: list[str] = list(DEFAULT_CONTACT_KEYWORDS)
