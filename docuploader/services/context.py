"""Caller-supplied context for workflows that send e-mails with links."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from docuploader.core.config import get_settings

if TYPE_CHECKING:
    from docuploader.core.config import Settings

DEFAULT_LOCALE = "en"
DEFAULT_BASE_URL = "http://localhost:8000"


@dataclass(frozen=True)
class RequestContext:
    """
    Locale and base URL of the caller.

    HTTP routes build it from the incoming request; jobs and scripts use
    from_settings(). Workflows never look the request up themselves.
    """

    locale: str = DEFAULT_LOCALE
    base_url: str = DEFAULT_BASE_URL

    @classmethod
    def from_settings(cls, settings: "Settings | None" = None) -> "RequestContext":
        settings = settings or get_settings()
        return cls(locale=DEFAULT_LOCALE, base_url=settings.HOST_URL or DEFAULT_BASE_URL)
