"""Load catalog movies and their reviews from a JSON file.

The file holds ``{"movies": [...], "reviews": [...]}`` using the API's
camelCase field names. Rows whose key already exists are skipped, so the
script can be re-run safely.

    python -m movie_reviews.scripts.seed_catalog data/catalog.json [--purge]
"""
import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, Tuple

from sqlalchemy.engine import Engine

from movie_reviews.config import load_config
from movie_reviews.config.logging import setup_logging
from movie_reviews.db.database import Base, create_db_engine, create_session_factory, init_db
from movie_reviews.db.models import MovieORM, ReviewORM

logger = logging.getLogger(__name__)


def _movie_row(raw: Dict[str, Any]) -> MovieORM:
    return MovieORM(
        id=int(raw['id']),
        title=str(raw['title']),
        overview=str(raw.get('overview', '')),
        genres=list(dict.fromkeys(raw.get('genres') or [])),
        release_date=str(raw['releaseDate']),
        production_companies=list(dict.fromkeys(raw['productionCompanies'])) if raw.get('productionCompanies') else None,
        runtime=int(raw['runtime']) if raw.get('runtime') is not None else None,
        poster_url=raw.get('posterUrl'),
        cast=raw.get('cast'),
        is_fantasy=False
    )


def _review_row(raw: Dict[str, Any]) -> ReviewORM:
    return ReviewORM(
        movie_id=int(raw['movieId']),
        review_id=int(raw['reviewId']),
        reviewer_id=str(raw['reviewerId']),
        review_date=str(raw['reviewDate']),
        content=str(raw['content']),
        translated_content=raw.get('translatedContent')
    )


def seed_catalog(engine: Engine, catalog_path: Path) -> Tuple[int, int, int]:
    """Import movies and reviews.

    Returns:
        tuple: (movies_added, reviews_added, skipped_count)
    """
    logger.info(f"Reading catalog from {catalog_path}...")
    catalog = json.loads(Path(catalog_path).read_text(encoding="utf-8"))

    db_session = create_session_factory(engine)()
    movies_added = 0
    reviews_added = 0
    skipped = 0
    seen_movies = set()
    seen_reviews = set()

    try:
        for raw in catalog.get('movies', []):
            try:
                movie = _movie_row(raw)
            except (KeyError, TypeError, ValueError) as e:
                skipped += 1
                logger.warning(f"Skipped malformed movie entry {raw.get('id')}: {e}")
                continue
            if movie.id in seen_movies or db_session.get(MovieORM, movie.id) is not None:
                skipped += 1
                continue
            seen_movies.add(movie.id)
            db_session.add(movie)
            movies_added += 1

        for raw in catalog.get('reviews', []):
            try:
                review = _review_row(raw)
            except (KeyError, TypeError, ValueError) as e:
                skipped += 1
                logger.warning(f"Skipped malformed review entry {raw.get('reviewId')}: {e}")
                continue
            key = (review.movie_id, review.review_id)
            if key in seen_reviews or db_session.get(ReviewORM, key) is not None:
                skipped += 1
                continue
            seen_reviews.add(key)
            db_session.add(review)
            reviews_added += 1

        db_session.commit()
        logger.info(f"Catalog import summary: {movies_added} movies, {reviews_added} reviews added, {skipped} skipped")
        return movies_added, reviews_added, skipped

    except Exception as e:
        db_session.rollback()
        logger.error(f"Error importing catalog: {e}")
        raise

    finally:
        db_session.close()


def purge_database(engine: Engine):
    """Drop and recreate every table."""
    logger.info("Purging database...")
    Base.metadata.drop_all(bind=engine)
    init_db(engine)
    logger.info("Database purged successfully")


def main():
    parser = argparse.ArgumentParser(description="Seed the catalog movies and reviews")
    parser.add_argument("catalog", type=Path, help="JSON file with 'movies' and 'reviews' lists")
    parser.add_argument("--purge", action="store_true", help="drop all tables before importing")
    args = parser.parse_args()

    config = load_config()
    setup_logging(config['logging']['directory'], config['logging']['level'])

    engine = create_db_engine(config['database']['url'], config['database']['timeout_seconds'])
    init_db(engine)
    if args.purge:
        purge_database(engine)
    seed_catalog(engine, args.catalog)


if __name__ == "__main__":
    main()
