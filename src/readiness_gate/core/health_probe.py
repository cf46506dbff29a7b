import logging
from typing import Optional

import httpx

from readiness_gate.config.config import Config
from readiness_gate.contracts.endpoint import EndpointDescriptor

logger = logging.getLogger(__name__)

HEALTHY_MARKER = "OK"

# Bytes read while looking for the end of the first body line
MAX_FIRST_LINE_BYTES = 4096


class HttpHealthProbe:
    """
    Issues a single health-check GET against an endpoint.

    An endpoint is healthy when it answers with status 200 and the first line
    of the response body contains "OK". Any other status, an empty body, a
    timeout or a connection error counts as unhealthy and is never raised to
    the caller.
    """

    def __init__(
        self,
        connect_timeout: Optional[float] = None,
        read_timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the HttpHealthProbe.

        Args:
            connect_timeout (Optional[float]): Seconds allowed to establish the connection.
            read_timeout (Optional[float]): Seconds allowed between received bytes.
            transport (Optional[httpx.AsyncBaseTransport]): Transport handed to the
                HTTP client, e.g. an ASGI transport in tests.
        """
        self.connect_timeout = (
            Config.CONNECT_TIMEOUT_SECONDS if connect_timeout is None else connect_timeout
        )
        self.read_timeout = (
            Config.READ_TIMEOUT_SECONDS if read_timeout is None else read_timeout
        )
        self.transport = transport

    @property
    def timeout(self) -> httpx.Timeout:
        return httpx.Timeout(self.read_timeout, connect=self.connect_timeout)

    async def check(self, endpoint: EndpointDescriptor) -> bool:
        """
        Probe the endpoint once.

        Returns:
            bool: True if the endpoint reported itself healthy, False otherwise.
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self.transport,
                follow_redirects=True,
            ) as client:
                async with client.stream("GET", endpoint.url) as resp:
                    if resp.status_code != 200:
                        logger.debug(
                            f"Health check for {endpoint.url} returned status={resp.status_code}"
                        )
                        return False
                    first_line = await self._read_first_line(resp)
        except Exception as e:
            logger.debug(f"Health check error for {endpoint.url}: {e!r}")
            return False

        if first_line is None:
            logger.debug(f"Health check for {endpoint.url} returned an empty body")
            return False
        return HEALTHY_MARKER in first_line

    @staticmethod
    async def _read_first_line(resp: httpx.Response) -> Optional[str]:
        """
        Return the first body line, reading at most MAX_FIRST_LINE_BYTES.
        """
        buffer = b""
        async for chunk in resp.aiter_bytes():
            buffer += chunk
            if b"\n" in buffer or len(buffer) >= MAX_FIRST_LINE_BYTES:
                break
        if not buffer:
            return None
        line = buffer[:MAX_FIRST_LINE_BYTES].split(b"\n", 1)[0].rstrip(b"\r")
        return line.decode(resp.charset_encoding or "utf-8", errors="replace")
