"""Base model configuration for all Pydantic models."""

from pydantic import BaseModel, ConfigDict


class GPUMonBaseModel(BaseModel):
    """Base model with common configuration.

    Conventions:
    - All timestamps are ISO 8601 format with timezone
    - Field names are lowercase snake_case and match the JSON wire names
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=True,
    )
