"""Base Pydantic models for stepwise elements.

This module defines the foundational model classes used by steps,
cases, responses and runtime settings. Data models are immutable and
strict so that a case described by a test author can not be altered
while it is executed.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaModel(BaseModel):
    """Base immutable model for all case elements.

    Design principles enforced by this model:
        - Immutability: steps and cases can not be modified after creation.
        - Strict schema validation: unknown or extra fields are rejected
          to avoid silent errors caused by typos.

    Arbitrary types are allowed so that drivers and check callables can
    be carried as plain fields.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
        extra='forbid',
        populate_by_name=True,
    )


class DescribedMixin(SchemaModel):
    """Mixin providing element self-documentation.

    The fields defined in this model do not affect execution semantics
    and are used for reporting only.
    """

    title: str | None = Field(
        default=None,
        title='Title',
        description='Short human-readable title of the element.',
    )

    description: str | None = Field(
        default=None,
        title='Description',
        description='Detailed human-readable description of the element.',
    )


class SettingsModel(BaseSettings):
    """Base immutable model for runtime settings.

    Resolved settings can not be modified after creation, and unrelated
    environment variables are ignored.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )
