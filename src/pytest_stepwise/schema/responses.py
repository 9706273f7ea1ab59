"""Backend response models.

Clients return responses shaped like the JSON envelope of a secrets
backend: an optional data mapping, an optional auth block describing
an issued token, lease information, and warnings or errors. Checks
rely only on `auth` and `is_error`; everything else is carried for
test authors.
"""

from typing import Any

from pydantic import ConfigDict, Field, model_validator

from pytest_stepwise.models import SchemaModel


class _EnvelopeModel(SchemaModel):
    """Base for envelope blocks.

    Backends add fields over time, so unknown fields are ignored, and
    JSON `null` collections are read as empty ones.
    """

    model_config = ConfigDict(
        frozen=True,
        extra='ignore',
        populate_by_name=True,
    )

    @model_validator(mode='before')
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:  # noqa: ANN401
        """Drop `null` fields so that their defaults apply."""
        if not isinstance(data, dict):
            return data

        return {
            key: value
            for key, value in data.items()
            if value is not None
        }


class Auth(_EnvelopeModel):
    """Token information returned by login and token endpoints."""

    client_token: str = ''
    accessor: str = ''
    display_name: str = ''

    policies: list[str] = Field(default_factory=list)
    token_policies: list[str] = Field(default_factory=list)
    metadata: dict[str, str] = Field(default_factory=dict)

    lease_duration: int = 0
    renewable: bool = False


class Response(_EnvelopeModel):
    """A single backend response."""

    request_id: str = ''

    lease_id: str = ''
    lease_duration: int = 0
    renewable: bool = False

    data: dict[str, Any] = Field(default_factory=dict)
    auth: Auth | None = None

    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    @property
    def is_error(self) -> bool:
        """Whether the response represents an error."""
        return bool(self.errors)

    @classmethod
    def from_json(cls, payload: dict[str, Any] | None) -> 'Response | None':
        """Build a response from a decoded JSON envelope.

        Args:
            payload: Decoded JSON body, or `None` for empty bodies.

        Returns:
            A response, or `None` when the backend returned no body.
        """
        if payload is None:
            return None

        return cls.model_validate(payload)
