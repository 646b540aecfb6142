from pathlib import Path
import os
from dotenv import load_dotenv

env_path = Path(__file__).resolve().parent.parent.parent / '.env'
load_dotenv(dotenv_path=env_path)


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == '':
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == '':
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}")


# Database
DATABASE_URL = os.getenv('DATABASE_URL')
USE_SQLITE = os.getenv('USE_SQLITE', 'true').lower() == 'true'
SQLITE_PATH = os.getenv('SQLITE_PATH', './movie_reviews.db')
DB_USER = os.getenv('DB_USER')
DB_PASSWORD = os.getenv('DB_PASSWORD')
DB_HOST = os.getenv('DB_HOST', 'localhost')
DB_PORT = os.getenv('DB_PORT', '5432')
DB_NAME = os.getenv('DB_NAME', 'movie_reviews')
DB_TIMEOUT_SECONDS = _float_env('DB_TIMEOUT_SECONDS', 5.0)

if not USE_SQLITE and not DATABASE_URL and not (DB_USER and DB_PASSWORD):
    raise ValueError("DB_USER and DB_PASSWORD must be set when USE_SQLITE is false")

# Table names
MOVIES_TABLE_NAME = os.getenv('MOVIES_TABLE_NAME', 'movies')
REVIEWS_TABLE_NAME = os.getenv('REVIEWS_TABLE_NAME', 'movie_reviews')
USERS_TABLE_NAME = os.getenv('USERS_TABLE_NAME', 'users')

# Translation
TRANSLATE_SOURCE_LANGUAGE = os.getenv('TRANSLATE_SOURCE_LANGUAGE', 'en')
TRANSLATE_DEFAULT_TARGET_LANGUAGE = os.getenv('TRANSLATE_DEFAULT_TARGET_LANGUAGE', 'fr')
TRANSLATION_API_URL = os.getenv('TRANSLATION_API_URL', 'http://localhost:5000/translate')
TRANSLATION_API_KEY = os.getenv('TRANSLATION_API_KEY')
TRANSLATION_TIMEOUT_SECONDS = _float_env('TRANSLATION_TIMEOUT_SECONDS', 5.0)

# Identity
BCRYPT_ROUNDS = _int_env('BCRYPT_ROUNDS', 12)

# Id generation
REVIEW_ID_MAX_ATTEMPTS = _int_env('REVIEW_ID_MAX_ATTEMPTS', 5)
FANTASY_ID_MAX_ATTEMPTS = _int_env('FANTASY_ID_MAX_ATTEMPTS', 5)

# Posters
POSTERS_DIR = os.getenv('POSTERS_DIR', './media')
POSTERS_BASE_URL = os.getenv('POSTERS_BASE_URL', 'http://localhost:8000/media')

# HTTP
CORS_ALLOW_ORIGINS = [
    origin.strip() for origin in os.getenv('CORS_ALLOW_ORIGINS', '*').split(',') if origin.strip()
]

# Logging
LOGS_DIR = os.getenv('LOGS_DIR', 'logs')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
