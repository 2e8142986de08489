"""Base model for upstream JSON:API payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator, model_validator


class APIModel(BaseModel):
    """Lenient upstream model.

    Unknown fields are ignored and absent or null fields fall back to their
    defaults. A null document decodes to the all-default model. Only a
    structurally invalid payload fails validation.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def null_to_empty(cls, data: Any) -> Any:
        """Treat a JSON null document like an empty object."""
        return {} if data is None else data

    @field_validator("*", mode="before")
    @classmethod
    def null_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        """Treat JSON null like a missing field."""
        if value is None and info.field_name is not None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value
