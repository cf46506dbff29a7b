import asyncio
import logging
import time
from typing import Iterable, Optional

from readiness_gate.contracts.endpoint import EndpointDescriptor
from readiness_gate.contracts.probe_outcome import FleetResult
from readiness_gate.core.endpoint_prober import EndpointProber
from readiness_gate.core.health_probe import HttpHealthProbe

logger = logging.getLogger(__name__)


class FleetOrchestrator:
    """
    Runs one EndpointProber per endpoint concurrently and waits for all of them.
    """

    def __init__(
        self,
        health_probe: Optional[HttpHealthProbe] = None,
        poll_interval: Optional[float] = None,
        log_interval: Optional[float] = None,
    ):
        """
        Initialize the FleetOrchestrator.

        Args:
            health_probe (Optional[HttpHealthProbe]): Probe shared by all probers; it holds no per-endpoint state.
            poll_interval (Optional[float]): Seconds between attempts, defaults to Config.
            log_interval (Optional[float]): Seconds between repeated "not healthy" lines, defaults to Config.
        """
        self.health_probe = health_probe or HttpHealthProbe()
        self.poll_interval = poll_interval
        self.log_interval = log_interval

    def prober_for(self, endpoint: EndpointDescriptor) -> EndpointProber:
        return EndpointProber(
            endpoint,
            health_probe=self.health_probe,
            poll_interval=self.poll_interval,
            log_interval=self.log_interval,
        )

    async def run(self, endpoints: Iterable[EndpointDescriptor]) -> FleetResult:
        """
        Probe every endpoint and aggregate the outcomes in input order.

        Raises:
            asyncio.CancelledError: If this call is cancelled before every prober concluded.
        """
        endpoints = list(endpoints)
        if not endpoints:
            logger.debug("No endpoints to wait for")
            return FleetResult.from_outcomes(())

        logger.info(f"Waiting for {len(endpoints)} endpoint(s)")
        started = time.monotonic()
        tasks = [
            asyncio.create_task(
                self.prober_for(endpoint).run(), name=f"probe:{endpoint.display_name}"
            )
            for endpoint in endpoints
        ]
        try:
            outcomes = await asyncio.gather(*tasks)
        except asyncio.CancelledError:
            logger.error(
                f"Interrupted while waiting for {len(tasks)} endpoint prober(s)"
            )
            raise
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()

        elapsed = time.monotonic() - started
        result = FleetResult.from_outcomes(outcomes)
        if result.all_healthy:
            logger.info(f"All endpoints are ready after {elapsed:.1f}s")
        else:
            names = ", ".join(o.endpoint.display_name for o in result.unhealthy)
            logger.warning(f"Endpoints not ready after {elapsed:.1f}s: {names}")
        return result


def run_fleet(endpoints: Iterable[EndpointDescriptor], **kwargs) -> FleetResult:
    """
    Blocking entry point: probe the endpoints on a fresh event loop.
    """
    return asyncio.run(FleetOrchestrator(**kwargs).run(endpoints))
