from fastapi import Depends, Request
from sqlalchemy.orm import Session

from movie_reviews.db.database import get_db
from movie_reviews.repositories import SQLAlchemyMovieRepo, SQLAlchemyReviewRepo, SQLAlchemyUserRepo
from movie_reviews.service.auth_service import AuthService
from movie_reviews.service.fantasy_movie_service import FantasyMovieService
from movie_reviews.service.movie_service import MovieService
from movie_reviews.service.review_service import ReviewService
from movie_reviews.service.translation_service import TranslationService


def get_review_service(request: Request, db: Session = Depends(get_db)) -> ReviewService:
    return ReviewService(
        movie_repository=SQLAlchemyMovieRepo(db),
        review_repository=SQLAlchemyReviewRepo(db),
        config=request.app.state.config['reviews']
    )

def get_translation_service(request: Request, db: Session = Depends(get_db)) -> TranslationService:
    return TranslationService(
        review_repository=SQLAlchemyReviewRepo(db),
        translation_backend=request.app.state.translation_backend,
        config=request.app.state.config['translation']
    )

def get_auth_service(request: Request, db: Session = Depends(get_db)) -> AuthService:
    return AuthService(
        SQLAlchemyUserRepo(db),
        bcrypt_rounds=request.app.state.config['auth']['bcrypt_rounds']
    )

def get_fantasy_movie_service(request: Request, db: Session = Depends(get_db)) -> FantasyMovieService:
    return FantasyMovieService(SQLAlchemyMovieRepo(db), config=request.app.state.config['fantasy'])

def get_movie_service(request: Request, db: Session = Depends(get_db)) -> MovieService:
    return MovieService(SQLAlchemyMovieRepo(db), request.app.state.poster_storage)
