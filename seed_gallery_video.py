"""
Create the "Gallary video" collection with one sample film.

Run once against a fresh database::

    python seed_gallery_video.py

Connection settings come from the same environment variables (or
``.env`` file) as the API.  If the collection already holds documents
nothing is written.
"""

import logging
import sys

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from categories import GALLERY_VIDEOS
from config import DATABASE_NAME, DATABASE_URL
from database import build_document
from errors import PortfolioError
from logging_config import setup_logging
from schemas import GalleryVideo

logger = logging.getLogger(__name__)

SAMPLE_FILM = {
    "title": "Sample Film",
    "url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
    "thumb": "https://images.unsplash.com/photo-1519741497674-611481863552?auto=format&fit=crop&q=80&w=600",
    "order": 0,
}


def seed(db: Database) -> bool:
    """Insert the sample film if the collection is empty. Returns True if inserted."""
    films = db[GALLERY_VIDEOS]
    existing = films.count_documents({})
    if existing > 0:
        logger.info('Collection "%s" already has %d document(s). No seed needed.', GALLERY_VIDEOS, existing)
        return False

    films.insert_one(build_document(GalleryVideo, SAMPLE_FILM))
    logger.info('Collection "%s" created with 1 sample document.', GALLERY_VIDEOS)
    return True


def main() -> int:
    setup_logging()
    logger.info("Connecting to MongoDB...")
    client = MongoClient(DATABASE_URL)
    try:
        seed(client[DATABASE_NAME])
    except (PyMongoError, PortfolioError) as e:
        logger.error("Seeding failed: %s", e)
        return 1
    finally:
        client.close()
    logger.info("Disconnected from MongoDB.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
