from movie_reviews.storage.interface import PosterStorage
from movie_reviews.storage.local_storage import LocalPosterStorage

__all__ = ["PosterStorage", "LocalPosterStorage"]
