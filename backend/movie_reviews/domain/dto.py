from datetime import date
from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel
from typing import Annotated, Optional, List
import re

from movie_reviews.domain.models import Movie, Review, User
from movie_reviews.validation import ID_MAX, ID_MIN, INT32_MAX, normalize_email, reject_bool

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# numeric strings are accepted; booleans and out-of-range values are not
Identifier = Annotated[int, BeforeValidator(reject_bool), Field(ge=ID_MIN, le=ID_MAX)]
Runtime = Annotated[int, BeforeValidator(reject_bool), Field(ge=0, le=INT32_MAX)]


def _dedupe(values: Optional[List[str]]) -> Optional[List[str]]:
    # sets of strings, kept in first-seen order
    if values is None:
        return None
    return list(dict.fromkeys(values))


class RequestModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ResponseModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Requests

class ReviewCreate(RequestModel):
    movie_id: Identifier
    reviewer_id: NonBlankStr
    content: NonBlankStr


class ReviewUpdate(RequestModel):
    content: NonBlankStr


class FantasyMovieCreate(RequestModel):
    title: NonBlankStr
    overview: NonBlankStr
    genres: List[NonBlankStr] = Field(..., min_length=1)
    release_date: date
    production_companies: Optional[List[NonBlankStr]] = None
    runtime: Optional[Runtime] = None

    @field_validator('genres', 'production_companies')
    @classmethod
    def dedupe_sets(cls, v):
        return _dedupe(v)


class CastMemberIn(RequestModel):
    name: NonBlankStr
    role: NonBlankStr
    description: str


class PosterFile(RequestModel):
    name: NonBlankStr
    content_type: NonBlankStr
    data: NonBlankStr


class CastUpdate(RequestModel):
    cast: List[CastMemberIn]
    poster_file: PosterFile


class SignupRequest(RequestModel):
    name: NonBlankStr
    email: str = Field(..., validation_alias=AliasChoices('email', 'Email'))
    password: str = Field(..., min_length=1)

    @field_validator('email', mode='before')
    @classmethod
    def normalize(cls, v):
        return normalize_email(v) if isinstance(v, str) else v

    @field_validator('email')
    @classmethod
    def email_shape(cls, v):
        if not EMAIL_PATTERN.match(v):
            raise ValueError('Invalid email format')
        return v


class SigninRequest(RequestModel):
    email: str = Field(..., min_length=1, validation_alias=AliasChoices('email', 'Email'))
    password: str = Field(..., min_length=1)

    @field_validator('email', mode='before')
    @classmethod
    def normalize(cls, v):
        return normalize_email(v) if isinstance(v, str) else v


# Responses

class CastMemberResponse(ResponseModel):
    name: str
    role: str
    description: str


class MovieResponse(ResponseModel):
    id: int
    title: str
    overview: str
    genres: List[str]
    release_date: str
    production_companies: Optional[List[str]] = None
    runtime: Optional[int] = None
    poster_url: Optional[str] = None
    cast: Optional[List[CastMemberResponse]] = None
    is_fantasy: bool = False

    @classmethod
    def from_domain(cls, movie: Movie) -> "MovieResponse":
        return cls(
            id=movie.id,
            title=movie.title,
            overview=movie.overview,
            genres=movie.genres,
            release_date=movie.release_date,
            production_companies=movie.production_companies,
            runtime=movie.runtime,
            poster_url=movie.poster_url,
            cast=[CastMemberResponse(**member.to_dict()) for member in movie.cast] if movie.cast is not None else None,
            is_fantasy=movie.is_fantasy
        )


class ReviewResponse(ResponseModel):
    movie_id: int
    review_id: int
    reviewer_id: str
    review_date: str
    content: str
    translated_content: Optional[str] = None

    @classmethod
    def from_domain(cls, review: Review) -> "ReviewResponse":
        return cls(
            movie_id=review.movie_id,
            review_id=review.review_id,
            reviewer_id=review.reviewer_id,
            review_date=review.review_date,
            content=review.content,
            translated_content=review.translated_content
        )


class MovieWithReviewsResponse(ResponseModel):
    movie: MovieResponse
    reviews: List[ReviewResponse]


class ReviewCreatedResponse(ResponseModel):
    message: str
    review_id: int
    review: ReviewResponse


class ReviewUpdatedResponse(ResponseModel):
    message: str
    updated_review: ReviewResponse


class MessageResponse(ResponseModel):
    message: str


class TranslationResponse(ResponseModel):
    translated_text: str
    cached: bool


class FantasyMovieCreatedResponse(ResponseModel):
    message: str
    movie_id: int


class CastUpdatedResponse(ResponseModel):
    message: str
    poster_url: str


class UserResponse(ResponseModel):
    user_id: str
    name: str
    email: str

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(user_id=user.user_id, name=user.name, email=user.email)


class UserEnvelope(ResponseModel):
    message: str
    user: UserResponse
