import logging
import secrets
from typing import Any, Callable, Dict, List, Optional

from movie_reviews.domain.models import Movie
from movie_reviews.repositories import MovieRepository
from movie_reviews.exceptions.repository import DuplicateEntityException
from movie_reviews.exceptions.service import IdAllocationException

logger = logging.getLogger(__name__)


class FantasyMovieService:
    """Creates user-invented movies with random ids outside the catalog range."""

    def __init__(self,
                 movie_repository: MovieRepository,
                 config: Dict[str, Any],
                 id_generator: Optional[Callable[[], int]] = None
                 ):
        self._movie_repo = movie_repository
        self._id_min = config['id_min']
        self._id_max = config['id_max']
        self._max_attempts = config.get('id_max_attempts', 5)
        self._id_generator = id_generator or self._random_id

    def _random_id(self) -> int:
        return self._id_min + secrets.randbelow(self._id_max - self._id_min + 1)

    def create_fantasy_movie(self,
                             title: str,
                             overview: str,
                             genres: List[str],
                             release_date: str,
                             production_companies: Optional[List[str]] = None,
                             runtime: Optional[int] = None
                             ) -> Movie:
        for attempt in range(1, self._max_attempts + 1):
            movie = Movie(
                id=self._id_generator(),
                title=title,
                overview=overview,
                genres=genres,
                release_date=release_date,
                production_companies=production_companies or None,
                runtime=runtime,
                is_fantasy=True
            )
            try:
                created = self._movie_repo.create(movie)
                logger.info(f"Created fantasy movie {created.id} ({created.title})")
                return created
            except DuplicateEntityException:
                logger.warning(f"Fantasy movie id {movie.id} already taken (attempt {attempt}/{self._max_attempts})")

        raise IdAllocationException(f"Could not allocate a movie id after {self._max_attempts} attempts")
