import base64
import pytest
from unittest.mock import Mock

from movie_reviews.domain.models import CastMember, Movie
from movie_reviews.service.movie_service import MovieService, safe_file_name
from movie_reviews.exceptions.repository import EntityNotFoundException
from movie_reviews.exceptions.service import UpstreamException
from movie_reviews.exceptions.storage import PosterStorageException
from movie_reviews.exceptions.validation import ValidationException

POSTER_DATA = base64.b64encode(b"\x89PNG fake image").decode("ascii")


@pytest.fixture
def mock_movie_repo():
    repo = Mock()
    repo.get_by_id.return_value = Movie(id=1, title="The Matrix", overview="...",
                                        genres=["Action"], release_date="1999-03-31")
    repo.update_cast_and_poster.side_effect = lambda movie_id, cast, poster_url: Movie(
        id=movie_id, title="The Matrix", overview="...", genres=["Action"],
        release_date="1999-03-31", cast=cast, poster_url=poster_url
    )
    return repo


@pytest.fixture
def mock_storage():
    storage = Mock()
    storage.save.side_effect = lambda key, data, content_type: f"http://media/{key}"
    return storage


@pytest.fixture
def movie_service(mock_movie_repo, mock_storage):
    return MovieService(mock_movie_repo, mock_storage)


@pytest.fixture
def cast():
    return [CastMember(name="Keanu Reeves", role="Neo", description="The One")]


def test_update_cast_and_poster(movie_service, mock_storage, cast):
    """Test the poster is stored and the movie gets the new cast and url."""
    movie = movie_service.update_cast_and_poster(1, cast, "poster.png", "image/png", POSTER_DATA)

    mock_storage.save.assert_called_once_with("posters/1/poster.png", b"\x89PNG fake image", "image/png")
    assert movie.poster_url == "http://media/posters/1/poster.png"
    assert movie.cast[0].role == "Neo"


def test_invalid_base64(movie_service, mock_storage, cast):
    """Test undecodable poster data is a validation error."""
    with pytest.raises(ValidationException) as exc:
        movie_service.update_cast_and_poster(1, cast, "poster.png", "image/png", "not base64!!")

    assert exc.value.errors[0]["field"] == "posterFile.data"
    mock_storage.save.assert_not_called()


def test_unknown_movie(movie_service, mock_movie_repo, mock_storage, cast):
    """Test nothing is uploaded for a missing movie."""
    mock_movie_repo.get_by_id.return_value = None

    with pytest.raises(EntityNotFoundException):
        movie_service.update_cast_and_poster(999, cast, "poster.png", "image/png", POSTER_DATA)
    mock_storage.save.assert_not_called()


def test_storage_failure(movie_service, mock_movie_repo, mock_storage, cast):
    """Test a storage failure surfaces as upstream and the movie is not updated."""
    mock_storage.save.side_effect = PosterStorageException("disk full")

    with pytest.raises(UpstreamException):
        movie_service.update_cast_and_poster(1, cast, "poster.png", "image/png", POSTER_DATA)
    mock_movie_repo.update_cast_and_poster.assert_not_called()


def test_safe_file_name_strips_directories():
    """Test path components are dropped from uploaded file names."""
    assert safe_file_name("../../etc/passwd") == "passwd"
    assert safe_file_name("C:\\posters\\my poster.jpg") == "my_poster.jpg"


def test_safe_file_name_rejects_empty():
    """Test a name with nothing usable left is rejected."""
    with pytest.raises(ValidationException):
        safe_file_name("..")
