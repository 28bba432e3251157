"""HTTP liveness probes for remote logo candidates."""

from dataclasses import dataclass
from typing import Optional

import httpx

from .logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProbeResult:
    url: str
    ok: bool
    status_code: Optional[int] = None
    error: Optional[str] = None


class HttpProbe:
    """
    HEAD-request probe with a bounded timeout.

    Failures (timeouts, transport errors, non-200 answers) come back as
    ProbeResult(ok=False); check() never raises for network problems.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self._client = client

    async def check(self, url: str, timeout: float) -> ProbeResult:
        try:
            if self._client is not None:
                response = await self._client.head(url, timeout=timeout, follow_redirects=True)
            else:
                async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
                    response = await client.head(url)
        except httpx.TimeoutException:
            logger.debug(f"Probe timeout for {url}")
            return ProbeResult(url=url, ok=False, error="timeout")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug(f"Probe error for {url}: {e}")
            return ProbeResult(url=url, ok=False, error=str(e) or type(e).__name__)

        return ProbeResult(url=url, ok=response.status_code == 200, status_code=response.status_code)
