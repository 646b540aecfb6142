from sqlalchemy.orm import Session
from typing import Optional
from sqlalchemy.exc import IntegrityError, OperationalError

from movie_reviews.domain.models import User
from movie_reviews.db.models import UserORM
from movie_reviews.repositories.interface.user_repository import UserRepository
from movie_reviews.exceptions.repository import (
    DuplicateEntityException,
    RepositoryOperationException,
    ConnectionException
)

class SQLAlchemyUserRepo(UserRepository):
    def __init__(self, db: Session):
        self.db = db

    def _to_domain(self, user_orm: UserORM) -> User:
        return User(
            email=user_orm.email,
            user_id=user_orm.user_id,
            name=user_orm.name,
            password_hash=user_orm.password_hash,
            created_at=user_orm.created_at
        )

    def _to_orm(self, user: User) -> UserORM:
        return UserORM(
            email=user.email,
            user_id=user.user_id,
            name=user.name,
            password_hash=user.password_hash,
            created_at=user.created_at
        )

    def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by normalized email"""
        try:
            user_orm = self.db.get(UserORM, email)
            return self._to_domain(user_orm) if user_orm else None
        except OperationalError as e:
            raise ConnectionException(f"Failed to get user by email: {str(e)}")
        except Exception as e:
            raise RepositoryOperationException(f"Failed to get user by email: {str(e)}")

    def create(self, user: User) -> User:
        """Create a new user, keyed by email"""
        try:
            user_orm = self._to_orm(user)
            self.db.add(user_orm)
            self.db.commit()
            self.db.refresh(user_orm)
            return self._to_domain(user_orm)
        except IntegrityError:
            self.db.rollback()
            raise DuplicateEntityException("User already exists with this email")
        except OperationalError as e:
            self.db.rollback()
            raise ConnectionException(f"Failed to create user: {str(e)}")
        except Exception as e:
            self.db.rollback()
            raise RepositoryOperationException(f"Failed to create user: {str(e)}")
