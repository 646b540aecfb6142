import base64
import pytest
from unittest.mock import Mock
from fastapi.testclient import TestClient

from movie_reviews.config import load_config
from movie_reviews.db.models import MovieORM, ReviewORM, UserORM
from movie_reviews.exceptions.translation import TranslationException
from movie_reviews.main import create_app
from movie_reviews.storage import LocalPosterStorage
from movie_reviews.translation import TranslationBackend


@pytest.fixture
def translation_backend():
    backend = Mock(spec=TranslationBackend)
    backend.translate.return_value = "Film incroyable"
    return backend


@pytest.fixture
def app(tmp_path, translation_backend):
    config = load_config({
        'database': {'url': f"sqlite:///{tmp_path / 'api.db'}"},
        'auth': {'bcrypt_rounds': 4},
        'logging': {'enabled': False},
    })
    storage = LocalPosterStorage(str(tmp_path / "media"), "http://testserver/media")
    return create_app(config, translation_backend=translation_backend, poster_storage=storage)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seeded(app):
    """Two catalog movies, one with two reviews."""
    session = app.state.session_factory()
    try:
        session.add_all([
            MovieORM(id=848326, title="Rebel Moon", overview="A colony under threat.",
                     genres=["Science Fiction"], release_date="2023-12-15", runtime=134),
            MovieORM(id=572802, title="Aquaman", overview="Black Manta returns.",
                     genres=["Action"], release_date="2023-12-20"),
            ReviewORM(movie_id=848326, review_id=20, reviewer_id="b@test.com",
                      review_date="2024-03-11", content="Second"),
            ReviewORM(movie_id=848326, review_id=10, reviewer_id="a@test.com",
                      review_date="2024-03-10", content="Amazing movie"),
        ])
        session.commit()
    finally:
        session.close()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_list_movies(client, seeded):
    response = client.get("/movies")

    assert response.status_code == 200
    assert [m["id"] for m in response.json()] == [572802, 848326]
    assert response.json()[1]["releaseDate"] == "2023-12-15"


def test_get_movie_with_ordered_reviews(client, seeded):
    response = client.get("/movies/848326")

    assert response.status_code == 200
    body = response.json()
    assert body["movie"]["title"] == "Rebel Moon"
    assert [r["reviewId"] for r in body["reviews"]] == [10, 20]


def test_get_movie_not_found(client, seeded):
    response = client.get("/movies/1")

    assert response.status_code == 404
    assert response.json() == {"detail": "Movie not found"}


def test_get_movie_bad_id(client):
    response = client.get("/movies/abc")

    assert response.status_code == 400
    assert response.json()["detail"]["errors"] == [{"field": "movieId", "message": "Must be an integer"}]


def test_create_review(client, seeded):
    response = client.post("/reviews", json={"movieId": 848326, "reviewerId": "c@test.com", "content": "Loved it"})

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Review posted successfully"
    assert body["reviewId"] > 20
    assert body["review"]["content"] == "Loved it"

    reviews = client.get("/movies/848326").json()["reviews"]
    assert reviews[-1]["reviewId"] == body["reviewId"]


def test_create_review_ids_increase(client, seeded):
    """Test consecutive reviews for one movie get strictly increasing ids."""
    ids = [
        client.post("/reviews", json={"movieId": 572802, "reviewerId": "c@test.com", "content": f"Take {i}"})
        .json()["reviewId"]
        for i in range(3)
    ]

    assert ids == sorted(set(ids))


def test_create_review_missing_fields(client):
    response = client.post("/reviews", json={"movieId": 848326})

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["message"] == "Missing or invalid required fields"
    assert sorted(e["field"] for e in detail["errors"]) == ["content", "reviewerId"]


def test_create_review_malformed_json(client):
    response = client.post("/reviews", content=b"{not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400


def test_update_review_keeps_other_fields(client, seeded):
    response = client.put("/movies/848326/reviews/10", json={"content": "Changed my mind"})

    assert response.status_code == 200
    updated = response.json()["updatedReview"]
    assert updated["content"] == "Changed my mind"
    assert updated["reviewerId"] == "a@test.com"
    assert updated["reviewDate"] == "2024-03-10"


def test_update_missing_review(client, seeded):
    response = client.put("/movies/848326/reviews/999", json={"content": "Hello"})

    assert response.status_code == 404
    assert response.json() == {"detail": "Review not found"}


def test_update_review_bad_key(client):
    response = client.put("/movies/x/reviews/y", json={"content": "Hello"})

    assert response.status_code == 400
    assert sorted(e["field"] for e in response.json()["detail"]["errors"]) == ["movieId", "reviewId"]


def test_delete_review(client, seeded):
    response = client.delete("/movies/848326/reviews/10")

    assert response.status_code == 200
    assert response.json() == {"message": "Review deleted successfully"}
    assert client.put("/movies/848326/reviews/10", json={"content": "Back?"}).status_code == 404


def test_delete_missing_review(client, seeded):
    response = client.delete("/movies/848326/reviews/999")

    assert response.status_code == 404


def test_translation_cached_after_first_call(client, seeded, translation_backend):
    """Test the second request is served from the stored translation."""
    first = client.get("/movies/848326/reviews/10/translation", params={"language": "fr"})
    second = client.get("/movies/848326/reviews/10/translation", params={"language": "fr"})

    assert first.status_code == 200
    assert first.json() == {"translatedText": "Film incroyable", "cached": False}
    assert second.json() == {"translatedText": "Film incroyable", "cached": True}
    translation_backend.translate.assert_called_once_with("en", "fr", "Amazing movie")

    review = client.get("/movies/848326").json()["reviews"][0]
    assert review["translatedContent"] == "Film incroyable"


def test_translation_default_language(client, seeded, translation_backend):
    client.get("/movies/848326/reviews/10/translation")

    translation_backend.translate.assert_called_once_with("en", "fr", "Amazing movie")


def test_translation_backend_failure(client, seeded, translation_backend):
    translation_backend.translate.side_effect = TranslationException("connection refused")

    response = client.get("/movies/848326/reviews/10/translation")

    assert response.status_code == 500
    assert response.json() == {"detail": "Upstream service unavailable"}
    review = client.get("/movies/848326").json()["reviews"][0]
    assert "translatedContent" not in review


def test_translation_missing_review(client, seeded, translation_backend):
    response = client.get("/movies/848326/reviews/999/translation")

    assert response.status_code == 404
    translation_backend.translate.assert_not_called()


def test_translation_bad_language(client, seeded):
    response = client.get("/movies/848326/reviews/10/translation", params={"language": "fr;drop"})

    assert response.status_code == 400


def test_signup_then_signin_with_normalized_email(client):
    """Test an email registered with odd casing and spacing signs in normalized."""
    signup = client.post("/auth/signup", json={"name": "Alice", "Email": "A@X.com ", "password": "s3cret"})

    assert signup.status_code == 201
    assert signup.json()["message"] == "User created successfully"
    assert signup.json()["user"]["email"] == "a@x.com"

    signin = client.post("/auth/signin", json={"email": "a@x.com", "password": "s3cret"})

    assert signin.status_code == 200
    assert signin.json()["message"] == "Sign-in successful"
    assert signin.json()["user"] == signup.json()["user"]
    assert "password" not in signin.text
    assert "passwordHash" not in signin.text


def test_signup_duplicate(client):
    client.post("/auth/signup", json={"name": "Alice", "email": "a@x.com", "password": "s3cret"})

    response = client.post("/auth/signup", json={"name": "Other", "email": " A@X.COM", "password": "other"})

    assert response.status_code == 409
    assert response.json() == {"detail": "User already exists"}


def test_signup_invalid_email(client):
    response = client.post("/auth/signup", json={"name": "Alice", "email": "nope", "password": "s3cret"})

    assert response.status_code == 400
    assert response.json()["detail"]["errors"][0]["field"] == "email"


def test_signin_failures_look_the_same(client):
    """Test wrong password and unknown account give identical responses."""
    client.post("/auth/signup", json={"name": "Alice", "email": "a@x.com", "password": "s3cret"})

    wrong_password = client.post("/auth/signin", json={"email": "a@x.com", "password": "guess"})
    unknown_user = client.post("/auth/signin", json={"email": "ghost@x.com", "password": "guess"})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json() == {"detail": "Invalid credentials"}


def test_signin_corrupted_user(client, app):
    session = app.state.session_factory()
    try:
        session.add(UserORM(email="broken@x.com", user_id="u-1", name="Broken", password_hash=None))
        session.commit()
    finally:
        session.close()

    response = client.post("/auth/signin", json={"email": "broken@x.com", "password": "anything"})

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal Server Error"}


def test_create_fantasy_movie(client):
    response = client.post("/movies/fantasy", json={
        "title": "Rift",
        "overview": "A tear in the sky.",
        "genres": ["sci-fi", "sci-fi"],
        "releaseDate": "2025-01-01",
        "runtime": 95
    })

    assert response.status_code == 201
    movie_id = response.json()["movieId"]
    assert movie_id >= 10_000_000

    movie = client.get(f"/movies/{movie_id}").json()["movie"]
    assert movie["isFantasy"] is True
    assert movie["genres"] == ["sci-fi"]
    assert "productionCompanies" not in movie


def test_create_fantasy_movie_invalid(client):
    response = client.post("/movies/fantasy", json={"title": "Rift", "genres": []})

    assert response.status_code == 400
    assert sorted(e["field"] for e in response.json()["detail"]["errors"]) == ["genres", "overview", "releaseDate"]


def test_update_cast_and_poster(client, seeded, tmp_path):
    payload = {
        "cast": [{"name": "Sofia Boutella", "role": "Kora", "description": "A former soldier"}],
        "posterFile": {
            "name": "rebel moon.png",
            "contentType": "image/png",
            "data": base64.b64encode(b"png-bytes").decode("ascii")
        }
    }

    response = client.post("/movies/848326/cast", json=payload)

    assert response.status_code == 200
    assert response.json()["posterUrl"] == "http://testserver/media/posters/848326/rebel_moon.png"
    assert (tmp_path / "media" / "posters" / "848326" / "rebel_moon.png").read_bytes() == b"png-bytes"

    movie = client.get("/movies/848326").json()["movie"]
    assert movie["cast"][0]["role"] == "Kora"
    assert movie["posterUrl"] == response.json()["posterUrl"]


def test_update_cast_unknown_movie(client):
    payload = {
        "cast": [],
        "posterFile": {"name": "p.png", "contentType": "image/png", "data": "cG5n"}
    }

    response = client.post("/movies/1/cast", json=payload)

    assert response.status_code == 404
    assert response.json() == {"detail": "Movie not found"}


def test_update_cast_bad_base64(client, seeded):
    payload = {
        "cast": [],
        "posterFile": {"name": "p.png", "contentType": "image/png", "data": "***"}
    }

    response = client.post("/movies/848326/cast", json=payload)

    assert response.status_code == 400
    assert response.json()["detail"]["errors"][0]["field"] == "posterFile.data"


TOO_LARGE = "99999999999999999999"


@pytest.mark.parametrize("method, path, body", [
    ("GET", f"/movies/{TOO_LARGE}", None),
    ("PUT", f"/movies/{TOO_LARGE}/reviews/10", {"content": "Hello"}),
    ("DELETE", f"/movies/848326/reviews/{TOO_LARGE}", None),
    ("GET", f"/movies/848326/reviews/{TOO_LARGE}/translation", None),
    ("POST", f"/movies/{TOO_LARGE}/cast",
     {"cast": [], "posterFile": {"name": "p.png", "contentType": "image/png", "data": "cG5n"}}),
])
def test_oversized_path_ids_are_rejected(client, seeded, method, path, body):
    """Test ids beyond the 64-bit range are validation errors, not server errors."""
    response = client.request(method, path, json=body)

    assert response.status_code == 400
    assert response.json()["detail"]["errors"][0]["message"] == "Out of range"


def test_create_review_oversized_movie_id(client):
    response = client.post("/reviews", json={"movieId": 10**20, "reviewerId": "c@test.com", "content": "Loved it"})

    assert response.status_code == 400
    assert [e["field"] for e in response.json()["detail"]["errors"]] == ["movieId"]


def test_create_review_boolean_movie_id(client, seeded):
    """Test JSON true is not read as movie 1."""
    response = client.post("/reviews", json={"movieId": True, "reviewerId": "c@test.com", "content": "Loved it"})

    assert response.status_code == 400
    assert [e["field"] for e in response.json()["detail"]["errors"]] == ["movieId"]


@pytest.mark.parametrize("runtime", [10**20, True])
def test_create_fantasy_movie_unusable_runtime(client, runtime):
    response = client.post("/movies/fantasy", json={
        "title": "Rift",
        "overview": "A tear in the sky.",
        "genres": ["sci-fi"],
        "releaseDate": "2025-01-01",
        "runtime": runtime
    })

    assert response.status_code == 400
    assert [e["field"] for e in response.json()["detail"]["errors"]] == ["runtime"]


def test_update_review_reports_path_and_body_errors(client):
    """Test a bad path id and a missing body field come back in one list."""
    response = client.put("/movies/x/reviews/10", json={})

    assert response.status_code == 400
    assert sorted(e["field"] for e in response.json()["detail"]["errors"]) == ["content", "movieId"]


def test_update_cast_reports_path_and_body_errors(client):
    response = client.post("/movies/abc/cast", json={"cast": []})

    assert response.status_code == 400
    assert sorted(e["field"] for e in response.json()["detail"]["errors"]) == ["movieId", "posterFile"]


def test_translation_reports_key_and_language_errors(client):
    response = client.get("/movies/x/reviews/y/translation", params={"language": "fr;drop"})

    assert response.status_code == 400
    assert sorted(e["field"] for e in response.json()["detail"]["errors"]) == ["language", "movieId", "reviewId"]
