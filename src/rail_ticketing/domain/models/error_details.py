"""Failure details attached to network errors."""

from pydantic import BaseModel, ConfigDict


class ErrorDetails(BaseModel):
    """What went wrong with an API call; ``status_code`` is None when no response arrived."""

    model_config = ConfigDict(frozen=True)

    status_code: int | None = None
    reason: str

    @property
    def is_client_error(self) -> bool:
        """True for 4xx responses, which the server uses to reject a request."""
        return self.status_code is not None and 400 <= self.status_code < 500
