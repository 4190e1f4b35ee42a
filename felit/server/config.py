"""Server configuration values."""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent
STATIC_DIR = BASE_DIR / "static"
PAGES_DIR = BASE_DIR / "pages"
# Runtime files default to the working directory, never the installed package.
RUNTIME_DIR = Path(os.getenv("FELIT_RUNTIME_DIR", os.getcwd())).resolve()

DATABASE_URL = os.getenv("FELIT_DATABASE_URL", f"sqlite:///{RUNTIME_DIR / 'felit.db'}")

SESSION_SECRET = os.getenv("FELIT_SESSION_SECRET", "felit_default_secret_change_this")
SESSION_COOKIE = os.getenv("FELIT_SESSION_COOKIE", "felit_session")
SESSION_MAX_AGE = int(os.getenv("FELIT_SESSION_MAX_AGE", str(60 * 60 * 24)))

BCRYPT_ROUNDS = int(os.getenv("FELIT_BCRYPT_ROUNDS", "12"))

LOG_FILE = Path(os.getenv("FELIT_LOG_FILE", str(RUNTIME_DIR / "server.log")))
LOG_LEVEL = os.getenv("FELIT_LOG_LEVEL", "INFO")
LOG_TO_CONSOLE = os.getenv("FELIT_LOG_TO_CONSOLE", "0").lower() in ("1", "true", "yes")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

LOGIN_PAGE = "/login.html"
