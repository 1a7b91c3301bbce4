import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _database_url() -> str:
    url = os.getenv("DATABASE_URL") or "sqlite:///./joblit.db"
    # Heroku/Render style URLs
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    return url


DATABASE_URL = _database_url()

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
if not JWT_SECRET_KEY:
    logger.warning("JWT_SECRET_KEY is not set, falling back to the development key")
    JWT_SECRET_KEY = "joblit-dev-secret-key"

ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24))

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", 12))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
