from movie_reviews.repositories.interface.movie_repository import MovieRepository
from movie_reviews.repositories.interface.review_repository import ReviewRepository
from movie_reviews.repositories.interface.user_repository import UserRepository
from movie_reviews.repositories.implementation.sql_alchemy_movie_repo import SQLAlchemyMovieRepo
from movie_reviews.repositories.implementation.sql_alchemy_review_repo import SQLAlchemyReviewRepo
from movie_reviews.repositories.implementation.sql_alchemy_user_repo import SQLAlchemyUserRepo

__all__ = [
    "MovieRepository",
    "ReviewRepository",
    "UserRepository",
    "SQLAlchemyMovieRepo",
    "SQLAlchemyReviewRepo",
    "SQLAlchemyUserRepo",
]
