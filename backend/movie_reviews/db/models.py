from sqlalchemy import Column, Integer, BigInteger, String, Text, Boolean, DateTime, JSON
from sqlalchemy.sql import func

from movie_reviews.config.environment import MOVIES_TABLE_NAME, REVIEWS_TABLE_NAME, USERS_TABLE_NAME
from movie_reviews.db.database import Base


class MovieORM(Base):
    __tablename__ = MOVIES_TABLE_NAME

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=False)
    title = Column(String, nullable=False)
    overview = Column(Text, nullable=False)
    genres = Column(JSON, nullable=False)
    release_date = Column(String, nullable=False)
    production_companies = Column(JSON, nullable=True)
    runtime = Column(Integer, nullable=True)
    poster_url = Column(String, nullable=True)
    cast = Column(JSON, nullable=True)
    is_fantasy = Column(Boolean, nullable=False, default=False)


class ReviewORM(Base):
    __tablename__ = REVIEWS_TABLE_NAME

    movie_id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=False)
    review_id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=False)
    reviewer_id = Column(String, nullable=False)
    review_date = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    translated_content = Column(Text, nullable=True)


class UserORM(Base):
    __tablename__ = USERS_TABLE_NAME

    email = Column(String, primary_key=True)
    user_id = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    password_hash = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
