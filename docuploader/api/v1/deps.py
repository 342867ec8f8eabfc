"""Shared route dependencies."""

from fastapi import Request

from docuploader.core.config import get_settings
from docuploader.services.context import DEFAULT_LOCALE, RequestContext


def _preferred_locale(accept_language: str | None) -> str:
    """First language tag of an Accept-Language header (e.g. 'de-DE,de;q=0.9' -> 'de-DE')."""
    if not accept_language:
        return DEFAULT_LOCALE
    first = accept_language.split(",")[0].split(";")[0].strip()
    return first or DEFAULT_LOCALE


def get_request_context(request: Request) -> RequestContext:
    """Locale and link base URL for workflows; HOST_URL wins over the request's own URL."""
    settings = get_settings()
    base_url = settings.HOST_URL or str(request.base_url).rstrip("/")
    return RequestContext(
        locale=_preferred_locale(request.headers.get("accept-language")),
        base_url=base_url,
    )
