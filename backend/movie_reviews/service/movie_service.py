import base64
import binascii
import logging
import re
from pathlib import PurePosixPath
from typing import List

from movie_reviews.domain.models import CastMember, Movie
from movie_reviews.repositories.interface.movie_repository import MovieRepository
from movie_reviews.storage.interface import PosterStorage
from movie_reviews.exceptions.repository import EntityNotFoundException
from movie_reviews.exceptions.service import UpstreamException
from movie_reviews.exceptions.storage import PosterStorageException
from movie_reviews.exceptions.validation import ValidationException
from movie_reviews.validation import INVALID_FIELDS_MESSAGE

logger = logging.getLogger(__name__)

UNSAFE_FILENAME_CHARS = re.compile(r'[^A-Za-z0-9._-]')


def safe_file_name(name: str) -> str:
    cleaned = UNSAFE_FILENAME_CHARS.sub("_", PurePosixPath(name.replace("\\", "/")).name)
    if cleaned.strip("._") == "":
        raise ValidationException(
            INVALID_FIELDS_MESSAGE,
            [{"field": "posterFile.name", "message": "Must be a usable file name"}]
        )
    return cleaned


class MovieService:
    def __init__(self, movie_repository: MovieRepository, poster_storage: PosterStorage):
        self.movie_repository = movie_repository
        self.poster_storage = poster_storage

    def update_cast_and_poster(self,
                               movie_id: int,
                               cast: List[CastMember],
                               poster_name: str,
                               poster_content_type: str,
                               poster_data: str
                               ) -> Movie:
        try:
            poster_bytes = base64.b64decode(poster_data, validate=True)
        except (binascii.Error, ValueError):
            raise ValidationException(
                INVALID_FIELDS_MESSAGE,
                [{"field": "posterFile.data", "message": "Must be base64-encoded"}]
            )

        file_name = safe_file_name(poster_name)

        if self.movie_repository.get_by_id(movie_id) is None:
            raise EntityNotFoundException(f"Movie {movie_id} not found")

        try:
            poster_url = self.poster_storage.save(f"posters/{movie_id}/{file_name}", poster_bytes, poster_content_type)
        except PosterStorageException as e:
            logger.error(f"Poster upload for movie {movie_id} failed: {str(e)}")
            raise UpstreamException("Poster storage unavailable") from e

        movie = self.movie_repository.update_cast_and_poster(movie_id, cast, poster_url)
        logger.info(f"Updated cast ({len(cast)} members) and poster for movie {movie_id}")
        return movie
