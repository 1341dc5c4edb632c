import os

from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


# Database
DATABASE_URL = os.getenv("DATABASE_URL") or os.getenv("MONGO_URI") or "mongodb://localhost:27017"
DATABASE_NAME = os.getenv("DATABASE_NAME", "Portfolio")

# Server
PORT = _int_env("PORT", 5000)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE") or None

# Advisory size warnings; MongoDB rejects documents over 16MB
LARGE_IMAGE_WARN_MB = _int_env("LARGE_IMAGE_WARN_MB", 20)
LARGE_MEDIA_WARN_MB = _int_env("LARGE_MEDIA_WARN_MB", 15)
