"""
Library Ledger – Django Settings (Infrastructure Only)
=======================================================
Django serves as the HTTP container for the ledger.
Ledger architecture is the authority — Django does not dictate structure.

The ledger keeps its state in memory, so no database and no
models are configured.
"""

import os
from pathlib import Path

from core.config.settings import LedgerSettings

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.getenv(
    "LIBLEDGER_SECRET_KEY",
    "libledger-dev-key-replace-before-deployment",
)

DEBUG = os.getenv("LIBLEDGER_DEBUG", "true").lower() == "true"

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "testserver"]

# ── Installed Apps ────────────────────────────────────────────
# No models: the ledger registers no Django apps.
INSTALLED_APPS = []

# ── Middleware ────────────────────────────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# Routes have no trailing slash.
APPEND_SLASH = False

# ── URL & WSGI ────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"

DATABASES = {}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

# ── Ledger ────────────────────────────────────────────────────
LEDGER_SETTINGS = LedgerSettings.from_env()

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "ledger": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "ledger",
        },
    },
    "loggers": {
        "libledger": {
            "handlers": ["console"],
            "level": LEDGER_SETTINGS.log_level,
            "propagate": True,
        },
    },
}
