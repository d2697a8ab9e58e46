import os
from pathlib import Path

DB_PATH = os.environ.get("BOOKSTORE_DB_PATH", str(Path.cwd() / "bookstore.db"))
DATABASE_URL = f"sqlite+aiosqlite:///{DB_PATH}"
DB_ECHO = os.environ.get("BOOKSTORE_DB_ECHO", "").lower() in ("1", "true", "yes")

LOG_LEVEL = os.environ.get("BOOKSTORE_LOG_LEVEL", "INFO").upper()

# Book listing defaults
DEFAULT_PAGE_SIZE = int(os.environ.get("BOOKSTORE_DEFAULT_PAGE_SIZE", "10"))
MAX_PAGE_SIZE = int(os.environ.get("BOOKSTORE_MAX_PAGE_SIZE", "200"))
