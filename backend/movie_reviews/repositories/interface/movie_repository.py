from abc import ABC, abstractmethod
from typing import List, Optional

from movie_reviews.domain.models import Movie, CastMember


class MovieRepository(ABC):
    @abstractmethod
    def get_by_id(self, movie_id: int) -> Optional["Movie"]:
        pass

    @abstractmethod
    def get_all_items(self) -> List["Movie"]:
        pass

    @abstractmethod
    def create(self, movie: Movie) -> "Movie":
        """Insert only if ``movie.id`` is free; raises DuplicateEntityException otherwise."""
        pass

    @abstractmethod
    def update_cast_and_poster(self, movie_id: int, cast: List[CastMember], poster_url: str) -> "Movie":
        pass
