from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, OperationalError
from typing import List, Optional

from movie_reviews.db.models import ReviewORM
from movie_reviews.domain.models import Review
from movie_reviews.repositories.interface.review_repository import ReviewRepository
from movie_reviews.exceptions.repository import (
    EntityNotFoundException,
    DuplicateEntityException,
    RepositoryOperationException,
    InvalidEntityDataException,
    ConnectionException
)


class SQLAlchemyReviewRepo(ReviewRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_domain(self, review_orm: ReviewORM) -> Review:
        try:
            return Review(
                movie_id=review_orm.movie_id,
                review_id=review_orm.review_id,
                reviewer_id=review_orm.reviewer_id,
                review_date=review_orm.review_date,
                content=review_orm.content,
                translated_content=review_orm.translated_content
            )
        except Exception as e:
            raise InvalidEntityDataException(f"Failed to convert review data: {str(e)}")

    def _to_orm(self, review: Review) -> ReviewORM:
        return ReviewORM(
            movie_id=review.movie_id,
            review_id=review.review_id,
            reviewer_id=review.reviewer_id,
            review_date=review.review_date,
            content=review.content,
            translated_content=review.translated_content
        )

    def _get_orm(self, movie_id: int, review_id: int) -> Optional[ReviewORM]:
        return self.session.get(ReviewORM, (movie_id, review_id))

    def get_by_key(self, movie_id: int, review_id: int) -> Optional[Review]:
        try:
            review_orm = self._get_orm(movie_id, review_id)
            return self._to_domain(review_orm) if review_orm else None
        except InvalidEntityDataException:
            raise
        except OperationalError as e:
            raise ConnectionException(f"Failed to get review: {str(e)}")
        except Exception as e:
            raise RepositoryOperationException(f"Failed to get review: {str(e)}")

    def get_by_movie_id(self, movie_id: int) -> List[Review]:
        try:
            reviews_orm = self.session.query(ReviewORM).filter(
                ReviewORM.movie_id == movie_id
            ).order_by(ReviewORM.review_id).all()
            return [self._to_domain(r) for r in reviews_orm]
        except InvalidEntityDataException:
            raise
        except OperationalError as e:
            raise ConnectionException(f"Failed to get movie reviews: {str(e)}")
        except Exception as e:
            raise RepositoryOperationException(f"Failed to get movie reviews: {str(e)}")

    def get_max_review_id(self, movie_id: int) -> Optional[int]:
        try:
            return self.session.query(func.max(ReviewORM.review_id)).filter(
                ReviewORM.movie_id == movie_id
            ).scalar()
        except OperationalError as e:
            raise ConnectionException(f"Failed to get latest review id: {str(e)}")
        except Exception as e:
            raise RepositoryOperationException(f"Failed to get latest review id: {str(e)}")

    def create(self, review: Review) -> Review:
        try:
            review_orm = self._to_orm(review)
            self.session.add(review_orm)
            self.session.commit()
            return self._to_domain(review_orm)
        except IntegrityError:
            self.session.rollback()
            raise DuplicateEntityException(f"Review {review.review_id} already exists for movie {review.movie_id}")
        except OperationalError as e:
            self.session.rollback()
            raise ConnectionException(f"Failed to add review: {str(e)}")
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to add review: {str(e)}")

    def update_content(self, movie_id: int, review_id: int, content: str) -> Review:
        try:
            review_orm = self._get_orm(movie_id, review_id)
            if not review_orm:
                raise EntityNotFoundException(f"Review {review_id} for movie {movie_id} not found")

            review_orm.content = content
            self.session.commit()
            return self._to_domain(review_orm)
        except EntityNotFoundException:
            raise
        except OperationalError as e:
            self.session.rollback()
            raise ConnectionException(f"Failed to update review: {str(e)}")
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to update review: {str(e)}")

    def set_translated_content(self, movie_id: int, review_id: int, translated_content: str) -> Review:
        try:
            review_orm = self._get_orm(movie_id, review_id)
            if not review_orm:
                raise EntityNotFoundException(f"Review {review_id} for movie {movie_id} not found")

            review_orm.translated_content = translated_content
            self.session.commit()
            return self._to_domain(review_orm)
        except EntityNotFoundException:
            raise
        except OperationalError as e:
            self.session.rollback()
            raise ConnectionException(f"Failed to cache translation: {str(e)}")
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to cache translation: {str(e)}")

    def delete(self, movie_id: int, review_id: int) -> bool:
        try:
            review_orm = self._get_orm(movie_id, review_id)
            if review_orm:
                self.session.delete(review_orm)
                self.session.commit()
                return True
            return False
        except OperationalError as e:
            self.session.rollback()
            raise ConnectionException(f"Failed to delete review: {str(e)}")
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to delete review: {str(e)}")
