"""
Pydantic schemas for Movie API.
"""

from datetime import date

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class MovieResponse(BaseModel):
    """Response model for a single movie."""

    model_config = ConfigDict(from_attributes=True)

    id_movie: int
    title: str
    original_title: str | None = None
    director: str | None = None
    actors: str | None = None
    duration: int | None = None
    release_date: date
    end_date: date | None = None
    language: str | None = None
    subtitle: str | None = None
    country: str | None = None
    description: str | None = None
    poster_image: str | None = None
    banner_image: str | None = None
    trailer_url: str | None = None
    age_restriction: str | None = None
    status: str


class MovieDetail(MovieResponse):
    """Movie with its genre names."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    genres: list[str] = Field(default_factory=list, validation_alias="genre_names")


class PopularMovie(MovieDetail):
    showtime_count: int


class ExportMovieResponse(BaseModel):
    """Flat movie record used by exports; genres is a comma-separated string."""

    model_config = ConfigDict(from_attributes=True)

    id_movie: int
    title: str
    original_title: str | None = None
    director: str | None = None
    actors: str | None = None
    duration: int | None = None
    release_date: date | None = None
    end_date: date | None = None
    language: str | None = None
    subtitle: str | None = None
    country: str | None = None
    description: str | None = None
    poster_image: str | None = None
    trailer_url: str | None = None
    age_restriction: str | None = None
    status: str
    genres: str | None = None


class PaginationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int = Field(serialization_alias="totalPages")


_ALIASES = {
    "actors": AliasChoices("actors", "cast"),
    "poster_image": AliasChoices("poster_image", "poster_url"),
    "banner_image": AliasChoices("banner_image", "banner_url"),
}


class MovieWrite(BaseModel):
    """
    Request body for creating or updating a movie.

    Every field is optional here; required fields are enforced by the
    catalog service so that a missing title yields the API's own 400 error.
    Accepts `cast`, `poster_url` and `banner_url` as input aliases.
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    original_title: str | None = None
    director: str | None = None
    actors: str | None = Field(None, validation_alias=_ALIASES["actors"])
    duration: int | None = Field(None, ge=0)
    release_date: date | None = None
    end_date: date | None = None
    language: str | None = None
    subtitle: str | None = None
    country: str | None = None
    description: str | None = None
    poster_image: str | None = Field(None, validation_alias=_ALIASES["poster_image"])
    banner_image: str | None = Field(None, validation_alias=_ALIASES["banner_image"])
    trailer_url: str | None = None
    age_restriction: str | None = None
    status: str | None = None
    genres: list[int | str] | None = None

    @field_validator("release_date", "end_date", mode="before")
    @classmethod
    def blank_date_is_none(cls, value):
        if value == "":
            return None
        return value

    def movie_fields(self) -> dict:
        """Column values explicitly present in the request body."""
        return self.model_dump(exclude_unset=True, exclude={"genres"})

    def genres_supplied(self) -> bool:
        return "genres" in self.model_fields_set and self.genres is not None
