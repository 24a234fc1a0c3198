"""Base Pydantic schema for the project.

Provides a common base class for all Pydantic models in claudist with
shared configuration and validation behavior.
"""

from pydantic import BaseModel, ConfigDict

__all__ = ["BaseSchema"]


class BaseSchema(BaseModel):
    """Base model for all Pydantic schemas.

    Provides common configuration for all models in the project:
    - from_attributes: Allow construction from arbitrary objects
    - populate_by_name: Accept field names as well as wire aliases

    Strings are never stripped here; transcript text must survive
    validation byte for byte.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )
