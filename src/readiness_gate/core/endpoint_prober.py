import asyncio
import logging
import time
from typing import Optional

from readiness_gate.config.config import Config
from readiness_gate.contracts.endpoint import EndpointDescriptor
from readiness_gate.contracts.probe_outcome import ProbeOutcome
from readiness_gate.core.health_probe import HttpHealthProbe

logger = logging.getLogger(__name__)


class EndpointProber:
    """
    Polls one endpoint until it is healthy or its max wait is used up.

    The endpoint is always probed at least once, even with a max wait of zero.
    Cancelling the prober while it waits ends the loop and yields the last
    outcome seen, or an unhealthy one if no probe completed.
    """

    def __init__(
        self,
        endpoint: EndpointDescriptor,
        health_probe: Optional[HttpHealthProbe] = None,
        poll_interval: Optional[float] = None,
        log_interval: Optional[float] = None,
    ):
        self.endpoint = endpoint
        self.health_probe = health_probe or HttpHealthProbe()
        self.poll_interval = (
            Config.POLL_INTERVAL_SECONDS if poll_interval is None else poll_interval
        )
        self.log_interval = (
            Config.LOG_INTERVAL_SECONDS if log_interval is None else log_interval
        )
        self.attempts = 0

    async def run(self) -> ProbeOutcome:
        budget = self.endpoint.max_wait.total_seconds()
        started = time.monotonic()
        last_log = None
        outcome = None

        try:
            while True:
                healthy = await self.health_probe.check(self.endpoint)
                self.attempts += 1
                outcome = ProbeOutcome(endpoint=self.endpoint, healthy=healthy)

                now = time.monotonic()
                if last_log is None or healthy or now - last_log >= self.log_interval:
                    state = "is ready" if healthy else "is not healthy yet..."
                    logger.info(f"{self.endpoint.display_name} {state}")
                    last_log = now

                if healthy:
                    return outcome
                if budget - (time.monotonic() - started) <= 0:
                    break
                await asyncio.sleep(self.poll_interval)
                if budget - (time.monotonic() - started) <= 0:
                    break
        except asyncio.CancelledError:
            logger.info(f"Stopped waiting for {self.endpoint.display_name}: cancelled")
            if outcome is None:
                outcome = ProbeOutcome(endpoint=self.endpoint, healthy=False)
            return outcome

        logger.warning(
            f"{self.endpoint.display_name} did not become ready within "
            f"{budget:g}s ({self.attempts} attempts)"
        )
        return outcome
