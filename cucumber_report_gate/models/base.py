"""Base model configuration for all report data structures."""

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator


class Model(BaseModel):
    """Base model for decoded report nodes.

    Report nodes are immutable once decoded and ignore Cucumber fields the
    gate does not use (tags, embeddings, hooks, ...). A JSON ``null`` decodes
    to the field's default, the same as a missing field.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_default(cls, value: object, info: ValidationInfo) -> object:
        if value is None and info.field_name is not None:
            field = cls.model_fields[info.field_name]
            return field.get_default(call_default_factory=True)
        return value
