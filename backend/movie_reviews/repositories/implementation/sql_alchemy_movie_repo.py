from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, OperationalError
from typing import List, Optional

from movie_reviews.db.models import MovieORM
from movie_reviews.domain.models import Movie, CastMember
from movie_reviews.repositories.interface.movie_repository import MovieRepository
from movie_reviews.exceptions.repository import (
    EntityNotFoundException,
    DuplicateEntityException,
    RepositoryOperationException,
    InvalidEntityDataException,
    ConnectionException
)


class SQLAlchemyMovieRepo(MovieRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_domain(self, movie_orm: MovieORM) -> Movie:
        try:
            cast = None
            if movie_orm.cast is not None:
                cast = [
                    CastMember(name=member["name"], role=member["role"], description=member.get("description", ""))
                    for member in movie_orm.cast
                ]

            return Movie(
                id=movie_orm.id,
                title=movie_orm.title,
                overview=movie_orm.overview,
                genres=list(movie_orm.genres),
                release_date=movie_orm.release_date,
                production_companies=list(movie_orm.production_companies) if movie_orm.production_companies else None,
                runtime=movie_orm.runtime,
                poster_url=movie_orm.poster_url,
                cast=cast,
                is_fantasy=bool(movie_orm.is_fantasy)
            )
        except Exception as e:
            raise InvalidEntityDataException(f"Failed to convert movie {movie_orm.id}: {str(e)}")

    def _to_orm(self, movie: Movie) -> MovieORM:
        return MovieORM(
            id=movie.id,
            title=movie.title,
            overview=movie.overview,
            genres=list(movie.genres),
            release_date=movie.release_date,
            production_companies=list(movie.production_companies) if movie.production_companies else None,
            runtime=movie.runtime,
            poster_url=movie.poster_url,
            cast=[member.to_dict() for member in movie.cast] if movie.cast is not None else None,
            is_fantasy=movie.is_fantasy
        )

    def get_by_id(self, movie_id: int) -> Optional[Movie]:
        try:
            if not isinstance(movie_id, int):
                raise RepositoryOperationException(f"Invalid movie_id type. Expected int, got {type(movie_id)}")

            movie_orm = self.session.get(MovieORM, movie_id)
            if not movie_orm:
                return None
            return self._to_domain(movie_orm)
        except (InvalidEntityDataException, RepositoryOperationException):
            raise
        except OperationalError as e:
            raise ConnectionException(f"Failed to get movie by ID: {str(e)}")
        except Exception as e:
            raise RepositoryOperationException(f"Failed to get movie by ID: {str(e)}")

    def get_all_items(self) -> List[Movie]:
        try:
            movies_orm = self.session.query(MovieORM).order_by(MovieORM.id).all()
            return [self._to_domain(movie_orm) for movie_orm in movies_orm]
        except InvalidEntityDataException:
            raise
        except OperationalError as e:
            raise ConnectionException(f"Failed to get all movies: {str(e)}")
        except Exception as e:
            raise RepositoryOperationException(f"Failed to get all movies: {str(e)}")

    def create(self, movie: Movie) -> Movie:
        try:
            movie_orm = self._to_orm(movie)
            self.session.add(movie_orm)
            self.session.commit()
            return self._to_domain(movie_orm)
        except IntegrityError:
            self.session.rollback()
            raise DuplicateEntityException(f"Movie {movie.id} already exists")
        except InvalidEntityDataException:
            raise
        except OperationalError as e:
            self.session.rollback()
            raise ConnectionException(f"Failed to create movie: {str(e)}")
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to create movie: {str(e)}")

    def update_cast_and_poster(self, movie_id: int, cast: List[CastMember], poster_url: str) -> Movie:
        try:
            movie_orm = self.session.get(MovieORM, movie_id)
            if not movie_orm:
                raise EntityNotFoundException(f"Movie {movie_id} not found")

            movie_orm.cast = [member.to_dict() for member in cast]
            movie_orm.poster_url = poster_url
            self.session.commit()
            return self._to_domain(movie_orm)
        except (EntityNotFoundException, InvalidEntityDataException):
            raise
        except OperationalError as e:
            self.session.rollback()
            raise ConnectionException(f"Failed to update movie cast: {str(e)}")
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to update movie cast: {str(e)}")
