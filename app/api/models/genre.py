"""
Pydantic schemas for Genre API.
"""

from pydantic import BaseModel, ConfigDict, Field


class GenreResponse(BaseModel):
    """Response model for a genre."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int = Field(validation_alias="id_genre")
    name: str = Field(validation_alias="genre_name")
