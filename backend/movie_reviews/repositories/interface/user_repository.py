from abc import ABC, abstractmethod
from typing import Optional

from movie_reviews.domain.models import User


class UserRepository(ABC):
    @abstractmethod
    def get_by_email(self, email: str) -> Optional["User"]:
        pass

    @abstractmethod
    def create(self, user: User) -> "User":
        """Insert only if the email is free; raises DuplicateEntityException otherwise."""
        pass
