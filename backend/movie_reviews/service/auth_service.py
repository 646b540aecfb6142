import logging
import uuid
from datetime import datetime, timezone

from passlib.context import CryptContext

from movie_reviews.domain.models import User
from movie_reviews.repositories import UserRepository
from movie_reviews.exceptions.auth import UserAlreadyExistsException, InvalidCredentialsException
from movie_reviews.exceptions.repository import DuplicateEntityException, InvalidEntityDataException

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


class AuthService:
    """Sign-up and sign-in against the users table.

    Emails reach this service already normalized (trimmed, lower-cased) by
    the request models.
    """

    def __init__(self, user_repository: UserRepository, bcrypt_rounds: int = 12):
        self.user_repository = user_repository
        self.pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=bcrypt_rounds)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        return self.pwd_context.verify(plain_password, hashed_password)

    def get_password_hash(self, password: str) -> str:
        return self.pwd_context.hash(password)

    def signup(self, name: str, email: str, password: str) -> User:
        # fast path; the insert below is what actually enforces uniqueness
        if self.user_repository.get_by_email(email):
            raise UserAlreadyExistsException("User already exists")

        user = User(
            email=email,
            user_id=str(uuid.uuid4()),
            name=name,
            password_hash=self.get_password_hash(password),
            created_at=datetime.now(timezone.utc)
        )

        try:
            created = self.user_repository.create(user)
        except DuplicateEntityException:
            raise UserAlreadyExistsException("User already exists")

        logger.info(f"Registered user {created.user_id} ({created.email})")
        return created

    def signin(self, email: str, password: str) -> User:
        user = self.user_repository.get_by_email(email)

        if user is None:
            # spend the same hashing time as a real comparison
            self.pwd_context.dummy_verify()
            logger.info(f"Failed sign-in for {email}")
            raise InvalidCredentialsException(INVALID_CREDENTIALS_MESSAGE)

        if not user.password_hash or not user.name or not user.user_id:
            logger.error(f"User record for {email} is incomplete")
            raise InvalidEntityDataException("User data is corrupted or incomplete")

        try:
            password_match = self.verify_password(password, user.password_hash)
        except ValueError:
            logger.error(f"Stored password hash for {email} is unreadable")
            raise InvalidEntityDataException("User data is corrupted or incomplete")

        if not password_match:
            logger.info(f"Failed sign-in for {email}")
            raise InvalidCredentialsException(INVALID_CREDENTIALS_MESSAGE)

        logger.info(f"User {user.user_id} signed in")
        return user
