import logging
from typing import Iterable, List

from readiness_gate.config.config import Config
from readiness_gate.contracts.probe_outcome import FleetResult
from readiness_gate.core.endpoint_parser import parse_endpoints
from readiness_gate.core.fleet import run_fleet

logger = logging.getLogger(__name__)


def extract_healthcheck_args(args: Iterable[str]) -> List[str]:
    """
    Return the values of all ``--healthcheck=`` arguments, ignoring everything else.
    """
    prefix = Config.HEALTHCHECK_ARG_PREFIX
    return [arg[len(prefix):] for arg in args if arg.startswith(prefix)]


def run_healthchecks(args: Iterable[str], **kwargs) -> FleetResult:
    """
    Wait for every endpoint named by a ``--healthcheck=`` argument.

    Meant for embedding in another program's start-up: unrelated arguments
    are skipped and no healthcheck arguments at all is a success.

    Raises:
        EndpointSpecError: If any healthcheck argument is malformed.
    """
    args = list(args)
    logger.debug(f"run: {args}")
    specs = extract_healthcheck_args(args)
    if not specs:
        logger.debug("No healthcheck endpoints given")
        return FleetResult.from_outcomes(())
    return run_fleet(parse_endpoints(specs), **kwargs)
