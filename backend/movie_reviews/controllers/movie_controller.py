from typing import Any, List
from fastapi import APIRouter, Body, Depends, status

from movie_reviews.controllers.errors import to_http_exception
from movie_reviews.domain.dto import (
    CastUpdate,
    CastUpdatedResponse,
    FantasyMovieCreate,
    FantasyMovieCreatedResponse,
    MovieResponse,
    MovieWithReviewsResponse,
    ReviewResponse
)
from movie_reviews.domain.models import CastMember
from movie_reviews.service.dependencies import get_review_service, get_fantasy_movie_service, get_movie_service
from movie_reviews.service.fantasy_movie_service import FantasyMovieService
from movie_reviews.service.movie_service import MovieService
from movie_reviews.service.review_service import ReviewService
from movie_reviews.validation import parse_identifier, validate_all, validate_payload


router = APIRouter(
    prefix="/movies",
    tags=["Movies"],
    responses={404: {"description": "Not found"}}
)


@router.get("", response_model=List[MovieResponse], response_model_exclude_none=True)
def list_movies(review_service: ReviewService = Depends(get_review_service)):
    try:
        return [MovieResponse.from_domain(movie) for movie in review_service.list_movies()]
    except Exception as e:
        raise to_http_exception(e)


@router.get("/{movie_id}", response_model=MovieWithReviewsResponse, response_model_exclude_none=True)
def get_movie(
    movie_id: str,
    review_service: ReviewService = Depends(get_review_service)
):
    try:
        movie, reviews = review_service.get_movie(parse_identifier("movieId", movie_id))
        return MovieWithReviewsResponse(
            movie=MovieResponse.from_domain(movie),
            reviews=[ReviewResponse.from_domain(review) for review in reviews]
        )
    except Exception as e:
        raise to_http_exception(e, not_found_message="Movie not found")


@router.post("/fantasy", status_code=status.HTTP_201_CREATED, response_model=FantasyMovieCreatedResponse)
def create_fantasy_movie(
    payload: Any = Body(None),
    fantasy_movie_service: FantasyMovieService = Depends(get_fantasy_movie_service)
):
    try:
        data = validate_payload(FantasyMovieCreate, payload)
        movie = fantasy_movie_service.create_fantasy_movie(
            title=data.title,
            overview=data.overview,
            genres=data.genres,
            release_date=data.release_date.isoformat(),
            production_companies=data.production_companies,
            runtime=data.runtime
        )
        return FantasyMovieCreatedResponse(message="Fantasy movie created successfully", movie_id=movie.id)
    except Exception as e:
        raise to_http_exception(e, conflict_message="Could not allocate a movie id")


@router.post("/{movie_id}/cast", response_model=CastUpdatedResponse)
def update_cast_and_poster(
    movie_id: str,
    payload: Any = Body(None),
    movie_service: MovieService = Depends(get_movie_service)
):
    try:
        parsed_id, data = validate_all(
            lambda: parse_identifier("movieId", movie_id),
            lambda: validate_payload(CastUpdate, payload)
        )
        movie = movie_service.update_cast_and_poster(
            movie_id=parsed_id,
            cast=[CastMember(name=m.name, role=m.role, description=m.description) for m in data.cast],
            poster_name=data.poster_file.name,
            poster_content_type=data.poster_file.content_type,
            poster_data=data.poster_file.data
        )
        return CastUpdatedResponse(message="Movie updated successfully", poster_url=movie.poster_url)
    except Exception as e:
        raise to_http_exception(e, not_found_message="Movie not found")
