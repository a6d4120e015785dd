"""Outbound HTTP: thin httpx wrapper returning (status, body)."""
import logging
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

import httpx

from .tools.errors import NetworkError

logger = logging.getLogger(__name__)

QueryParams = Union[Mapping[str, Any], Sequence[Tuple[str, Any]]]


class HttpClient:
    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        # transport is injectable for tests (httpx.MockTransport)
        self._transport = transport

    async def get(
        self,
        url: str,
        params: Optional[QueryParams] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: float = 10.0,
    ) -> Tuple[int, str]:
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                resp = await client.get(url, params=params, headers=headers)
        except httpx.TimeoutException as e:
            logger.error(f"GET {url} timed out after {timeout}s")
            raise NetworkError(f"Request to {httpx.URL(url).host} timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"GET {url} failed: {e}")
            raise NetworkError(f"Failed to connect to {httpx.URL(url).host}: {e}") from e
        logger.debug(f"GET {url} -> {resp.status_code}")
        return resp.status_code, resp.text
