"""Django settings for the campus events service.

Values come from environment variables; the defaults suit local development.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    return int(value) if value else default


SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "django-insecure-campus-events-dev-key")
DEBUG = env_bool("DJANGO_DEBUG", default=False)
ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")
    if host.strip()
]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "campus_events.apps.CampusEventsConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
]

ROOT_URLCONF = "campus_site.urls"
WSGI_APPLICATION = "campus_site.wsgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

DB_ENGINE = os.environ.get("CAMPUS_EVENTS_DB_ENGINE", "django.db.backends.sqlite3")
if DB_ENGINE.endswith("sqlite3"):
    DATABASES = {
        "default": {
            "ENGINE": DB_ENGINE,
            "NAME": os.environ.get("CAMPUS_EVENTS_DB_NAME", str(BASE_DIR / "db.sqlite3")),
            # SQLite has no row locks; IMMEDIATE transactions take the write lock
            # up front so admission scopes serialize instead of failing as locked.
            "OPTIONS": {
                "transaction_mode": "IMMEDIATE",
                "timeout": env_int("CAMPUS_EVENTS_DB_TIMEOUT", 20),
            },
            # File-backed so test threads share one database.
            "TEST": {
                "NAME": os.environ.get(
                    "CAMPUS_EVENTS_TEST_DB_NAME", str(BASE_DIR / "test_db.sqlite3")
                ),
            },
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": DB_ENGINE,
            "NAME": os.environ.get("CAMPUS_EVENTS_DB_NAME", "campus_events"),
            "USER": os.environ.get("CAMPUS_EVENTS_DB_USER", ""),
            "PASSWORD": os.environ.get("CAMPUS_EVENTS_DB_PASSWORD", ""),
            "HOST": os.environ.get("CAMPUS_EVENTS_DB_HOST", "localhost"),
            "PORT": os.environ.get("CAMPUS_EVENTS_DB_PORT", "5432"),
            "ATOMIC_REQUESTS": False,
        }
    }

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "campus-events",
    }
}

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework.authentication.SessionAuthentication",
        "rest_framework.authentication.BasicAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "EXCEPTION_HANDLER": "campus_events.handlers.errors.exception_handler",
}

CAMPUS_EVENTS = {
    "MAX_PARTICIPANTS_LIMIT": env_int("CAMPUS_EVENTS_MAX_PARTICIPANTS_LIMIT", 1000),
    "DEFAULT_MAX_PARTICIPANTS": env_int("CAMPUS_EVENTS_DEFAULT_MAX_PARTICIPANTS", 100),
    "CACHE_TTL": env_int("CAMPUS_EVENTS_CACHE_TTL", 60),
}

LOG_LEVEL = os.environ.get("CAMPUS_EVENTS_LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "loggers": {
        "campus_events": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": True,
        },
    },
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
