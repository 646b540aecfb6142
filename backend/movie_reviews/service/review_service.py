import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from movie_reviews.domain.models import Movie, Review
from movie_reviews.repositories import MovieRepository, ReviewRepository
from movie_reviews.exceptions.repository import (
    EntityNotFoundException,
    DuplicateEntityException
)
from movie_reviews.exceptions.service import IdAllocationException

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ReviewService:
    """Movies and their reviews, addressed by (movie_id, review_id)."""

    def __init__(self,
                 movie_repository: MovieRepository,
                 review_repository: ReviewRepository,
                 config: Optional[Dict[str, Any]] = None,
                 clock: Callable[[], datetime] = utc_now
                 ):
        self._movie_repo = movie_repository
        self._review_repo = review_repository
        self._max_attempts = (config or {}).get('id_max_attempts', 5)
        self._clock = clock

    def list_movies(self) -> List[Movie]:
        return self._movie_repo.get_all_items()

    def get_movie(self, movie_id: int) -> Tuple[Movie, List[Review]]:
        movie = self._movie_repo.get_by_id(movie_id)
        if movie is None:
            raise EntityNotFoundException(f"Movie {movie_id} not found")

        reviews = self._review_repo.get_by_movie_id(movie_id)
        return movie, reviews

    def _candidate_review_id(self, movie_id: int) -> int:
        # millisecond clock, bumped past the newest id so ids never go backwards
        candidate = int(self._clock().timestamp() * 1000)
        latest = self._review_repo.get_max_review_id(movie_id)
        if latest is not None and latest >= candidate:
            candidate = latest + 1
        return candidate

    def create_review(self, movie_id: int, reviewer_id: str, content: str) -> Review:
        review_date = self._clock().date().isoformat()

        for attempt in range(1, self._max_attempts + 1):
            review = Review(
                movie_id=movie_id,
                review_id=self._candidate_review_id(movie_id),
                reviewer_id=reviewer_id,
                review_date=review_date,
                content=content
            )
            try:
                created = self._review_repo.create(review)
                logger.info(f"Created review {created.review_id} for movie {movie_id}")
                return created
            except DuplicateEntityException:
                logger.warning(
                    f"Review id {review.review_id} for movie {movie_id} already taken "
                    f"(attempt {attempt}/{self._max_attempts})"
                )

        raise IdAllocationException(
            f"Could not allocate a review id for movie {movie_id} after {self._max_attempts} attempts"
        )

    def update_review(self, movie_id: int, review_id: int, content: str) -> Review:
        updated = self._review_repo.update_content(movie_id, review_id, content)
        logger.info(f"Updated review {review_id} for movie {movie_id}")
        return updated

    def delete_review(self, movie_id: int, review_id: int) -> bool:
        """Delete a review. Returns False when there was nothing to delete."""
        deleted = self._review_repo.delete(movie_id, review_id)
        if deleted:
            logger.info(f"Deleted review {review_id} for movie {movie_id}")
        return deleted
