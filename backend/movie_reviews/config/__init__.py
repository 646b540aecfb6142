from typing import Dict, Any
import copy

from movie_reviews.config import environment as env

VERSION = "0.1.0"
API_TITLE = "Movie Reviews API"
API_DESCRIPTION = "Movies, user reviews, accounts and on-demand review translation"

# fantasy movies live outside the catalog id range
FANTASY_ID_MIN = 10_000_000
FANTASY_ID_MAX = 2**31 - 1


def _database_url() -> str:
    if env.DATABASE_URL:
        return env.DATABASE_URL
    if env.USE_SQLITE:
        return f"sqlite:///{env.SQLITE_PATH}"
    return f"postgresql://{env.DB_USER}:{env.DB_PASSWORD}@{env.DB_HOST}:{env.DB_PORT}/{env.DB_NAME}"


def get_app_config() -> Dict[str, Any]:
    """Default application configuration built from the environment."""
    return {
        'database': {
            'url': _database_url(),
            'timeout_seconds': env.DB_TIMEOUT_SECONDS,
        },
        'translation': {
            'source_language': env.TRANSLATE_SOURCE_LANGUAGE,
            'default_target_language': env.TRANSLATE_DEFAULT_TARGET_LANGUAGE,
            'api_url': env.TRANSLATION_API_URL,
            'api_key': env.TRANSLATION_API_KEY,
            'timeout_seconds': env.TRANSLATION_TIMEOUT_SECONDS,
        },
        'auth': {
            'bcrypt_rounds': env.BCRYPT_ROUNDS,
        },
        'reviews': {
            'id_max_attempts': env.REVIEW_ID_MAX_ATTEMPTS,
        },
        'fantasy': {
            'id_min': FANTASY_ID_MIN,
            'id_max': FANTASY_ID_MAX,
            'id_max_attempts': env.FANTASY_ID_MAX_ATTEMPTS,
        },
        'posters': {
            'directory': env.POSTERS_DIR,
            'base_url': env.POSTERS_BASE_URL,
        },
        'cors_allow_origins': env.CORS_ALLOW_ORIGINS,
        'logging': {
            'enabled': True,
            'directory': env.LOGS_DIR,
            'level': env.LOG_LEVEL,
        },
    }


def load_config(custom_config: Dict[str, Any] = None) -> Dict[str, Any]:
    """Load configuration with optional custom overrides.

    Overrides are merged one level deep, so ``{'database': {'url': ...}}``
    replaces only the url and keeps the default timeout.
    """
    config = get_app_config()
    if custom_config is None:
        return config

    for key, value in custom_config.items():
        if isinstance(value, dict) and isinstance(config.get(key), dict):
            merged = copy.deepcopy(config[key])
            merged.update(value)
            config[key] = merged
        else:
            config[key] = value
    return config


def validate_config(config: Dict[str, Any]):
    if not config['database']['url']:
        raise ValueError("database url must be set")
    if config['database']['timeout_seconds'] <= 0:
        raise ValueError("DB_TIMEOUT_SECONDS must be positive")
    if config['translation']['timeout_seconds'] <= 0:
        raise ValueError("TRANSLATION_TIMEOUT_SECONDS must be positive")
    if not config['translation']['source_language']:
        raise ValueError("TRANSLATE_SOURCE_LANGUAGE must be set")
    if not config['translation']['default_target_language']:
        raise ValueError("TRANSLATE_DEFAULT_TARGET_LANGUAGE must be set")
    if config['reviews']['id_max_attempts'] < 1:
        raise ValueError("REVIEW_ID_MAX_ATTEMPTS must be at least 1")
    if config['fantasy']['id_max_attempts'] < 1:
        raise ValueError("FANTASY_ID_MAX_ATTEMPTS must be at least 1")
    if config['fantasy']['id_min'] >= config['fantasy']['id_max']:
        raise ValueError("fantasy id_min must be less than id_max")
    if not 4 <= config['auth']['bcrypt_rounds'] <= 31:
        raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
