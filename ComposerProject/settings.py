"""
Django settings for ComposerProject.

Minimal settings to run the composer app on its own, e.g. for the tests.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "composer-insecure-development-key")

DEBUG = os.environ.get("DJANGO_DEBUG", "False") == "True"

ALLOWED_HOSTS = []

INSTALLED_APPS = [
    "composer",
]

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {},
    },
]

DATABASES = {}

USE_TZ = True

# Composer
COMPOSER_MARKDOWN_BACKEND = os.environ.get("COMPOSER_MARKDOWN_BACKEND", "markdown")
COMPOSER_FALLBACK_BLOCK = "core/paragraph"
COMPOSER_FREEFORM_BLOCK = "core/freeform"
COMPOSER_BLOCK_DELIMITER = "<!-- wp:"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {name} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "loggers": {
        "composer": {
            "handlers": ["console"],
            "level": os.environ.get("COMPOSER_LOG_LEVEL", "WARNING"),
        },
    },
}
