import re
from datetime import timedelta
from typing import Iterable, List

from pydantic import ValidationError

from readiness_gate.contracts.endpoint import EndpointDescriptor

USAGE = "endpoint,max-wait-sec[,name]"

# Optional sign and ASCII digits only: no blanks, no underscores
_WAIT_PATTERN = re.compile(r"[+-]?[0-9]+")


class EndpointSpecError(ValueError):
    """Raised when an endpoint descriptor string cannot be parsed."""


def parse_max_wait(text: str) -> timedelta:
    """
    Parse a whole number of seconds into a timedelta.

    Raises:
        EndpointSpecError: If the value is not a plain integer or is too large for a timedelta.
    """
    if not _WAIT_PATTERN.fullmatch(text):
        raise EndpointSpecError(f"invalid max wait {text!r}, usage: {USAGE}")
    try:
        return timedelta(seconds=int(text))
    except (ValueError, OverflowError) as e:
        raise EndpointSpecError(
            f"max wait {text!r} out of range ({e}), usage: {USAGE}"
        ) from e


def parse_endpoint(text: str) -> EndpointDescriptor:
    """
    Parse ``address,max-wait-seconds[,name]`` into an EndpointDescriptor.
    """
    fields = text.split(",")
    if len(fields) < 2 or len(fields) > 3:
        raise EndpointSpecError(f"invalid endpoint {text!r}, usage: {USAGE}")

    address = fields[0].strip()
    max_wait = parse_max_wait(fields[1])
    name = fields[2].strip() if len(fields) == 3 else None

    try:
        return EndpointDescriptor(address=address, max_wait=max_wait, name=name or None)
    except ValidationError as e:
        reasons = "; ".join(err["msg"] for err in e.errors())
        raise EndpointSpecError(
            f"invalid endpoint {text!r}: {reasons}, usage: {USAGE}"
        ) from e


def parse_endpoints(texts: Iterable[str]) -> List[EndpointDescriptor]:
    # All entries are validated before any probing starts
    return [parse_endpoint(text) for text in texts]
