"""
Best‑effort page title enrichment.

When a bookmark is created without a title, the service downloads the
target page and uses the text of its ``<title>`` element.  The whole
exchange (connect, headers and body) must finish within
``settings.title_fetch_timeout`` seconds, and at most
``MAX_TITLE_BYTES`` of the body are read; the title lives in the
document head, so that is enough for any real page.  The request
identifies itself with a browser user agent.  Enrichment is strictly
optional: every failure is logged and reported as "no title"
(``None``).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from bookmark_manager_api.app.core.config import settings
from bookmark_manager_api.app.core.errors import TransientFetchError


logger = logging.getLogger(__name__)

MAX_TITLE_BYTES = 256 * 1024


def extract_title(html: str) -> str:
    """Return the stripped text of the first ``<title>`` element in ``html``.

    Raises ``TransientFetchError`` when the document has no title or
    the title is blank.
    """
    soup = BeautifulSoup(html, "html.parser")
    if soup.title is None:
        raise TransientFetchError("Page has no <title> element")
    title = soup.title.get_text().strip()
    if not title:
        raise TransientFetchError("Page title is empty")
    return title


async def _download_head(client: httpx.AsyncClient, url: str, timeout: float) -> str:
    """Stream ``url`` and return at most ``MAX_TITLE_BYTES`` of it as text."""
    headers = {"User-Agent": settings.title_fetch_user_agent}
    async with client.stream("GET", url, headers=headers, timeout=timeout) as response:
        response.raise_for_status()
        content_type = response.headers.get("content-type", "")
        if content_type and "html" not in content_type.lower():
            raise TransientFetchError(f"Unexpected content type {content_type}")
        body = bytearray()
        async for chunk in response.aiter_bytes():
            body.extend(chunk)
            if len(body) >= MAX_TITLE_BYTES:
                break
        encoding = response.charset_encoding or "utf-8"
    return bytes(body[:MAX_TITLE_BYTES]).decode(encoding, errors="replace")


async def fetch_page_title(
    url: str,
    *,
    timeout: Optional[float] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[str]:
    """Fetch ``url`` and return its page title, or ``None`` on any failure.

    ``timeout`` bounds the whole fetch, not each network step.
    ``client`` may be supplied to reuse a connection pool (or, in tests,
    a client with a mock transport); otherwise a short‑lived client is
    created for this call.
    """
    timeout = settings.title_fetch_timeout if timeout is None else timeout

    async def fetch() -> str:
        if client is not None:
            return await _download_head(client, url, timeout)
        async with httpx.AsyncClient(follow_redirects=True) as own_client:
            return await _download_head(own_client, url, timeout)

    try:
        html = await asyncio.wait_for(fetch(), timeout)
        title = extract_title(html)
    except asyncio.TimeoutError:
        logger.info("Could not fetch page title for %s: no response within %ss", url, timeout)
        return None
    except (httpx.HTTPError, TransientFetchError) as exc:
        logger.info("Could not fetch page title for %s: %s", url, exc)
        return None
    except Exception:
        # Malformed responses can fail in the decoder or parser.
        logger.warning("Unexpected error while fetching page title for %s", url, exc_info=True)
        return None
    logger.debug("Fetched title %r for %s", title, url)
    return title
