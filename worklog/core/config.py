"""Configuration for the work log backend, read from the environment (and .env)."""

import os
from dotenv import load_dotenv

load_dotenv()

# Storage paths
DATA_DIR = os.getenv("DATA_DIR", "./data")
WORKLOGS_FILE = os.getenv("WORKLOGS_FILE", os.path.join(DATA_DIR, "worklogs.json"))
COMPONENTS_FILE = os.getenv("COMPONENTS_FILE", os.path.join(DATA_DIR, "components.json"))

# Upload storage
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "./uploads")
UPLOAD_URL_PREFIX = os.getenv("UPLOAD_URL_PREFIX", "/uploads")

# Serialize read-modify-write per collection (false keeps last-write-wins races)
WRITE_LOCK_ENABLED = os.getenv("WRITE_LOCK_ENABLED", "true").lower() == "true"

# Seed a starter entry when the log collection is empty
SEED_ON_START = os.getenv("SEED_ON_START", "true").lower() == "true"

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
    if origin.strip()
]

HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "5000"))

# Version string
VERSION = "1.0.0"


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "false").lower() == "true"


def validate_config():
    """Validate storage configuration and return any issues."""
    issues = []

    if os.path.abspath(WORKLOGS_FILE) == os.path.abspath(COMPONENTS_FILE):
        issues.append("WORKLOGS_FILE and COMPONENTS_FILE must be different files")

    if not UPLOAD_URL_PREFIX.startswith("/"):
        issues.append(f"UPLOAD_URL_PREFIX must start with '/': {UPLOAD_URL_PREFIX}")

    if not 0 < PORT < 65536:
        issues.append(f"Invalid PORT: {PORT}")

    return issues
