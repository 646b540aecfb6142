from typing import Any, Optional
from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from movie_reviews.controllers.errors import to_http_exception
from movie_reviews.domain.dto import (
    MessageResponse,
    ReviewCreate,
    ReviewCreatedResponse,
    ReviewResponse,
    ReviewUpdate,
    ReviewUpdatedResponse,
    TranslationResponse
)
from movie_reviews.service.dependencies import get_review_service, get_translation_service
from movie_reviews.service.review_service import ReviewService
from movie_reviews.service.translation_service import TranslationService
from movie_reviews.validation import normalize_language, parse_review_key, validate_all, validate_payload

router = APIRouter(
    tags=["Reviews"],
    responses={404: {"description": "Not found"}}
)

REVIEW_NOT_FOUND = "Review not found"


@router.post("/reviews", status_code=status.HTTP_201_CREATED, response_model=ReviewCreatedResponse,
             response_model_exclude_none=True)
def create_review(
    payload: Any = Body(None),
    review_service: ReviewService = Depends(get_review_service)
):
    try:
        data = validate_payload(ReviewCreate, payload)
        review = review_service.create_review(data.movie_id, data.reviewer_id, data.content)
        return ReviewCreatedResponse(
            message="Review posted successfully",
            review_id=review.review_id,
            review=ReviewResponse.from_domain(review)
        )
    except Exception as e:
        raise to_http_exception(e, conflict_message="Could not allocate a review id")


@router.put("/movies/{movie_id}/reviews/{review_id}", response_model=ReviewUpdatedResponse,
            response_model_exclude_none=True)
def update_review(
    movie_id: str,
    review_id: str,
    payload: Any = Body(None),
    review_service: ReviewService = Depends(get_review_service)
):
    try:
        key, data = validate_all(
            lambda: parse_review_key(movie_id, review_id),
            lambda: validate_payload(ReviewUpdate, payload)
        )
        review = review_service.update_review(*key, data.content)
        return ReviewUpdatedResponse(
            message="Review updated successfully",
            updated_review=ReviewResponse.from_domain(review)
        )
    except Exception as e:
        raise to_http_exception(e, not_found_message=REVIEW_NOT_FOUND)


@router.delete("/movies/{movie_id}/reviews/{review_id}", response_model=MessageResponse)
def delete_review(
    movie_id: str,
    review_id: str,
    review_service: ReviewService = Depends(get_review_service)
):
    try:
        deleted = review_service.delete_review(*parse_review_key(movie_id, review_id))
    except Exception as e:
        raise to_http_exception(e, not_found_message=REVIEW_NOT_FOUND)

    # the store treats a missing key as a no-op; callers still learn it was absent
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=REVIEW_NOT_FOUND)

    return MessageResponse(message="Review deleted successfully")


@router.get("/movies/{movie_id}/reviews/{review_id}/translation", response_model=TranslationResponse)
def get_translated_review(
    movie_id: str,
    review_id: str,
    language: Optional[str] = Query(None),
    translation_service: TranslationService = Depends(get_translation_service)
):
    try:
        key, target = validate_all(
            lambda: parse_review_key(movie_id, review_id),
            lambda: normalize_language(language, translation_service.default_target_language)
        )
        translated, cached = translation_service.get_translation(*key, target)
        return TranslationResponse(translated_text=translated, cached=cached)
    except Exception as e:
        raise to_http_exception(e, not_found_message=REVIEW_NOT_FOUND)
