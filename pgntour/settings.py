"""
Django settings for pgntour.

Values come from environment variables so the same module serves local
development, CI and deployment.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


SECRET_KEY = os.environ.get("PGNTOUR_SECRET_KEY", "pgntour-insecure-development-key")

DEBUG = env_bool("PGNTOUR_DEBUG", True)

ALLOWED_HOSTS = [h for h in os.environ.get("PGNTOUR_ALLOWED_HOSTS", "").split(",") if h]

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "pgntour.tournament_core",
    "pgntour.tournament",
]

MIDDLEWARE = []

DATABASES = {
    "default": {
        "ENGINE": os.environ.get("PGNTOUR_DB_ENGINE", "django.db.backends.sqlite3"),
        "NAME": os.environ.get("PGNTOUR_DB_NAME", str(BASE_DIR / "pgntour.sqlite3")),
        "USER": os.environ.get("PGNTOUR_DB_USER", ""),
        "PASSWORD": os.environ.get("PGNTOUR_DB_PASSWORD", ""),
        "HOST": os.environ.get("PGNTOUR_DB_HOST", ""),
        "PORT": os.environ.get("PGNTOUR_DB_PORT", ""),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

TIME_ZONE = "UTC"
USE_TZ = True

# External engine analysis service
ENGINE_ANALYSIS_URL = os.environ.get(
    "PGNTOUR_ANALYSIS_URL", "http://localhost:8080/api/analyze"
)
ENGINE_ANALYSIS_DEPTH = int(os.environ.get("PGNTOUR_ANALYSIS_DEPTH", "20"))
ENGINE_ANALYSIS_TIMEOUT = float(os.environ.get("PGNTOUR_ANALYSIS_TIMEOUT", "60"))

LOG_LEVEL = os.environ.get("PGNTOUR_LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "loggers": {
        "pgntour": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "django": {
            "handlers": ["console"],
            "level": "WARNING",
        },
    },
}
