"""Check that every listed link resolves with HTTP 200."""

from __future__ import annotations

import asyncio
import http.client
from collections.abc import Iterable
from dataclasses import dataclass

from .client import HTTPError, LinkClient


@dataclass(frozen=True)
class LinkResult:
    url: str
    status: int | None
    final_url: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == 200


async def check_link(client: LinkClient, url: str) -> LinkResult:
    try:
        resp = await client.status(url)
    except HTTPError as e:
        return LinkResult(url=url, status=e.status_code, error=str(e))
    except (OSError, http.client.HTTPException, ValueError) as e:
        # URLError wraps the socket error in .reason; InvalidURL/BadStatusLine carry their own text.
        reason = getattr(e, "reason", None) or e
        detail = str(reason) or type(e).__name__
        return LinkResult(url=url, status=None, error=detail)
    return LinkResult(url=url, status=resp.status, final_url=resp.url)


async def check_links(urls: Iterable[str], client: LinkClient | None = None) -> list[LinkResult]:
    """Check each URL once, returning results in input order."""
    unique = list(dict.fromkeys(urls))
    client = client or LinkClient()
    async with client:
        return list(await asyncio.gather(*(check_link(client, u) for u in unique)))
