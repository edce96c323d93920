"""
Django settings for the hospital backend.

The project carries no HTTP surface of its own; settings cover the ORM,
the REST framework error handler and the scheduling/inventory engine.
"""

from __future__ import annotations

import os
from pathlib import Path

import dj_database_url
from dotenv import load_dotenv

# ------------------------------------------------------------
# Paths / Env
# ------------------------------------------------------------

BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from repo root if present; real environment variables win.
load_dotenv(dotenv_path=BASE_DIR / ".env", override=False)


def _env(key: str, default: str | None = None) -> str | None:
    return os.getenv(key, default)


def _env_bool(key: str, default: bool = False) -> bool:
    raw = os.getenv(key)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# ------------------------------------------------------------
# Core
# ------------------------------------------------------------

SECRET_KEY = _env(
    "DJANGO_SECRET_KEY",
    "django-insecure-7m#q2v!hospital-backend-dev-key-change-me",
)

DEBUG = _env_bool("DJANGO_DEBUG", default=False)

ALLOWED_HOSTS = [
    host.strip()
    for host in _env("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,[::1]").split(",")
    if host.strip()
]


# ------------------------------------------------------------
# Apps
# ------------------------------------------------------------

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    # Third-party
    "rest_framework",
    # Hospital
    "hospital_backend.core",
    "hospital_backend.appointments",
    "hospital_backend.admissions",
    "hospital_backend.medical",
    "hospital_backend.inventory",
]


# ------------------------------------------------------------
# Database (DATABASE_URL; SQLite file when unset)
# ------------------------------------------------------------

DATABASES = {
    "default": dj_database_url.config(
        env="DATABASE_URL",
        default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}",
        conn_max_age=_env_int("DB_CONN_MAX_AGE", 0),
    )
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


# ------------------------------------------------------------
# REST
# ------------------------------------------------------------

REST_FRAMEWORK = {
    "EXCEPTION_HANDLER": "hospital_backend.core.exception_handler.hospital_exception_handler",
}


# ------------------------------------------------------------
# I18N / TZ
# ------------------------------------------------------------

LANGUAGE_CODE = _env("DJANGO_LANGUAGE_CODE", "en-us")
TIME_ZONE = _env("DJANGO_TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True


# ------------------------------------------------------------
# Scheduling / Inventory engine
# ------------------------------------------------------------

HOSPITAL_SCHEDULING = {
    "WORKING_HOURS_START": _env("HOSPITAL_WORKING_HOURS_START", "08:00"),
    # End is exclusive: 18:00 itself is not bookable.
    "WORKING_HOURS_END": _env("HOSPITAL_WORKING_HOURS_END", "18:00"),
    "SLOT_MINUTES": _env_int("HOSPITAL_SLOT_MINUTES", 30),
}

HOSPITAL_INVENTORY = {
    "EXPIRY_HORIZON_DAYS": _env_int("HOSPITAL_EXPIRY_HORIZON_DAYS", 30),
}


# ------------------------------------------------------------
# Logging
# ------------------------------------------------------------

LOG_LEVEL = _env("LOG_LEVEL", "INFO")
LOG_DIR = Path(_env("DJANGO_LOG_DIR", str(BASE_DIR / "logs")))

try:
    LOG_DIR.mkdir(parents=True, exist_ok=True)
except (OSError, PermissionError):
    # Read-only filesystem
    LOG_DIR = Path("/tmp")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "kv": {
            "format": "%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s",
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "kv",
            "level": LOG_LEVEL,
            "stream": "ext://sys.stdout",
        },
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "kv",
            "level": LOG_LEVEL,
            "filename": str(LOG_DIR / "hospital.log"),
            "maxBytes": 10 * 1024 * 1024,
            "backupCount": 5,
        },
    },
    "root": {
        "handlers": ["console", "file"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        "django": {
            "handlers": ["console", "file"],
            "level": _env("DJANGO_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
        "django.db.backends": {
            "handlers": ["console"],
            "level": _env("DJANGO_DB_LOG_LEVEL", "WARNING"),
            "propagate": False,
        },
        "hospital_backend": {
            "handlers": ["console", "file"],
            "level": _env("HOSPITAL_LOG_LEVEL", LOG_LEVEL),
            "propagate": False,
        },
    },
}
