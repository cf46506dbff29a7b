import os


class Config:
    """
    Configuration class for environment variables and default settings.
    """

    # Transport-level timeouts for a single probe, independent of an endpoint's max wait
    CONNECT_TIMEOUT_SECONDS = float(os.environ.get("READINESS_CONNECT_TIMEOUT", "1.024"))
    READ_TIMEOUT_SECONDS = float(os.environ.get("READINESS_READ_TIMEOUT", "1.024"))

    # Pause between two attempts against the same endpoint
    POLL_INTERVAL_SECONDS = float(os.environ.get("READINESS_POLL_INTERVAL", "1.0"))

    # Minimum spacing of "not healthy yet" lines per endpoint
    LOG_INTERVAL_SECONDS = float(os.environ.get("READINESS_LOG_INTERVAL", "5.0"))

    HEALTHCHECK_ARG_PREFIX = "--healthcheck="
