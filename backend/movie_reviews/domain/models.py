from datetime import datetime
from typing import Optional, List


class CastMember:
    def __init__(self, name: str, role: str, description: str):
        self.name = name
        self.role = role
        self.description = description

    def to_dict(self) -> dict:
        return {"name": self.name, "role": self.role, "description": self.description}


class Movie:
    def __init__(
        self,
        id: int,
        title: str,
        overview: str,
        genres: List[str],
        release_date: str,
        production_companies: Optional[List[str]] = None,
        runtime: Optional[int] = None,
        poster_url: Optional[str] = None,
        cast: Optional[List[CastMember]] = None,
        is_fantasy: bool = False
    ):
        self.id = id
        self.title = title
        self.overview = overview
        self.genres = genres
        self.release_date = release_date
        self.production_companies = production_companies
        self.runtime = runtime
        self.poster_url = poster_url
        self.cast = cast
        self.is_fantasy = is_fantasy


class Review:
    def __init__(
        self,
        movie_id: int,
        review_id: int,
        reviewer_id: str,
        review_date: str,
        content: str,
        translated_content: Optional[str] = None
    ):
        self.movie_id = movie_id
        self.review_id = review_id
        self.reviewer_id = reviewer_id
        self.review_date = review_date
        self.content = content
        self.translated_content = translated_content


class User:
    def __init__(
        self,
        email: str,
        user_id: str,
        name: str,
        password_hash: Optional[str],
        created_at: datetime = None
    ):
        self.email = email
        self.user_id = user_id
        self.name = name
        self.password_hash = password_hash
        self.created_at = created_at
