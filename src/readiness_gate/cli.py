import argparse
import logging
import sys

from readiness_gate.config.logging_config import setup_logging
from readiness_gate.core.endpoint_parser import USAGE, EndpointSpecError, parse_endpoints
from readiness_gate.core.fleet import run_fleet

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNHEALTHY = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130


def build_parser():
    parser = argparse.ArgumentParser(
        prog="readiness-gate",
        description="Block until every given HTTP health endpoint answers 200 with an OK body.",
    )
    parser.add_argument(
        "--healthcheck",
        action="append",
        default=[],
        metavar=USAGE,
        help="Endpoint to wait for; may be repeated.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level, defaults to the LOG_LEVEL environment variable or INFO.",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        endpoints = parse_endpoints(args.healthcheck)
    except EndpointSpecError as e:
        logger.error(str(e))
        return EXIT_CONFIG_ERROR

    try:
        result = run_fleet(endpoints)
    except KeyboardInterrupt:
        logger.error("Interrupted before all endpoints concluded")
        return EXIT_INTERRUPTED

    for outcome in result.outcomes:
        status = "ready" if outcome.healthy else "NOT ready"
        print(f"{outcome.endpoint.display_name}: {status} ({outcome.endpoint.url})")
    return EXIT_OK if result.all_healthy else EXIT_UNHEALTHY


if __name__ == "__main__":
    sys.exit(main())
