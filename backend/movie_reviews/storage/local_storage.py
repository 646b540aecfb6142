import logging
from pathlib import Path

from movie_reviews.exceptions.storage import PosterStorageException
from movie_reviews.storage.interface import PosterStorage

logger = logging.getLogger(__name__)


class LocalPosterStorage(PosterStorage):
    def __init__(self, directory: str, base_url: str):
        self.directory = Path(directory).resolve()
        self.base_url = base_url.rstrip("/")

    def save(self, key: str, data: bytes, content_type: str) -> str:
        target = (self.directory / key).resolve()
        if self.directory not in target.parents:
            raise PosterStorageException(f"Refusing to write outside the poster directory: {key}")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            raise PosterStorageException(f"Failed to store poster {key}: {str(e)}") from e

        logger.info(f"Stored poster {key} ({content_type}, {len(data)} bytes)")
        return f"{self.base_url}/{key}"
