from datetime import timedelta
from typing import Optional

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, field_validator


class EndpointDescriptor(BaseModel):
    """
    Data model describing one endpoint to wait for: where to probe it, how long
    to keep trying, and an optional name used in log lines.
    """

    model_config = ConfigDict(frozen=True)

    address: AnyHttpUrl
    max_wait: timedelta
    name: Optional[str] = None

    @field_validator("max_wait")
    @classmethod
    def _max_wait_not_negative(cls, value: timedelta) -> timedelta:
        if value < timedelta(0):
            raise ValueError("max_wait must not be negative")
        return value

    @property
    def url(self) -> str:
        """
        Return the address as the string handed to the HTTP client.
        """
        return str(self.address)

    @property
    def display_name(self) -> str:
        """
        Return the configured name, falling back to the address host.
        """
        return self.name or self.address.host or self.url

    def __repr__(self):
        return (
            f"EndpointDescriptor(address={self.url}, name={self.name}, "
            f"max_wait={self.max_wait.total_seconds()}s)"
        )
