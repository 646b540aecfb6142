from abc import ABC, abstractmethod
from typing import List, Optional

from movie_reviews.domain.models import Review


class ReviewRepository(ABC):
    @abstractmethod
    def get_by_key(self, movie_id: int, review_id: int) -> Optional["Review"]:
        pass

    @abstractmethod
    def get_by_movie_id(self, movie_id: int) -> List["Review"]:
        """All reviews of a movie ordered by review id."""
        pass

    @abstractmethod
    def get_max_review_id(self, movie_id: int) -> Optional[int]:
        pass

    @abstractmethod
    def create(self, review: Review) -> "Review":
        """Insert only if the (movie_id, review_id) key is free; raises DuplicateEntityException otherwise."""
        pass

    @abstractmethod
    def update_content(self, movie_id: int, review_id: int, content: str) -> "Review":
        pass

    @abstractmethod
    def set_translated_content(self, movie_id: int, review_id: int, translated_content: str) -> "Review":
        pass

    @abstractmethod
    def delete(self, movie_id: int, review_id: int) -> bool:
        pass
