"""
Base models and common configuration.
Every reference model is immutable once validated.
"""

from pydantic import BaseModel, ConfigDict


class PgLocksBaseModel(BaseModel):
    """
    Base model for all pglocks models.
    Frozen, strict about extra fields, enum values serialized as plain strings.
    """

    model_config = ConfigDict(
        # Reference data never changes after load
        frozen=True,
        # Use enum values
        use_enum_values=True,
        # Prevent extra fields
        extra="forbid",
        # Better documentation
        json_schema_extra={"additionalProperties": False},
    )
