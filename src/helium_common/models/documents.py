"""Movie, actor and genre document models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DocumentType(str, Enum):
    """Discriminator stored in the `type` field of every document."""

    ACTOR = "Actor"
    MOVIE = "Movie"
    GENRE = "Genre"


class Actor(BaseModel):
    """Actor document as projected by the actor queries."""

    id: str = Field(..., description="Document ID")
    partition_key: str | None = Field(None, alias="partitionKey", description="Partition key")
    actor_id: str | None = Field(None, alias="actorId", description="IMDb actor ID (nm...)")
    type: str = Field(default=DocumentType.ACTOR.value, description="Document type")
    name: str | None = Field(None, description="Display name")
    birth_year: int | None = Field(None, alias="birthYear", description="Year of birth")
    death_year: int | None = Field(None, alias="deathYear", description="Year of death")
    profession: list[str] = Field(default_factory=list, description="Professions, most significant first")
    text_search: str | None = Field(None, alias="textSearch", description="Lower-cased search text")
    movies: list[dict[str, Any]] = Field(default_factory=list, description="Movie references")

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "nm0000173",
                "partitionKey": "0",
                "actorId": "nm0000173",
                "type": "Actor",
                "name": "Nicole Kidman",
                "birthYear": 1967,
                "profession": ["actress", "producer", "soundtrack"],
                "textSearch": "nicole kidman",
                "movies": [{"movieId": "tt0120663", "title": "Eyes Wide Shut"}],
            }
        },
    )


class Movie(BaseModel):
    """Movie document as projected by the movie queries."""

    id: str = Field(..., description="Document ID")
    partition_key: str | None = Field(None, alias="partitionKey", description="Partition key")
    movie_id: str | None = Field(None, alias="movieId", description="IMDb title ID (tt...)")
    type: str = Field(default=DocumentType.MOVIE.value, description="Document type")
    text_search: str | None = Field(None, alias="textSearch", description="Lower-cased search text")
    title: str | None = Field(None, description="Title")
    year: int | None = Field(None, description="Release year")
    runtime: int | None = Field(None, description="Runtime in minutes")
    rating: float | None = Field(None, description="Average rating")
    votes: int | None = Field(None, description="Number of votes")
    total_score: float | None = Field(None, alias="totalScore", description="Weighted score")
    genres: list[str] = Field(default_factory=list, description="Genre names")
    roles: list[dict[str, Any]] = Field(default_factory=list, description="Actor references")

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "tt0133093",
                "partitionKey": "0",
                "movieId": "tt0133093",
                "type": "Movie",
                "textSearch": "the matrix",
                "title": "The Matrix",
                "year": 1999,
                "runtime": 136,
                "rating": 8.7,
                "votes": 1639150,
                "totalScore": 10.4,
                "genres": ["Action", "Sci-Fi"],
                "roles": [{"actorId": "nm0000206", "name": "Keanu Reeves", "character": "Neo"}],
            }
        },
    )
