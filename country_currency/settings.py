"""
Django settings for country_currency project.

Every deploy-specific value is read from the environment so the same module
serves local development, tests and production.
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name, default=None):
    value = os.getenv(name)
    if value in (None, ""):
        return default
    return int(value)


SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-country-currency-dev-key")

DEBUG = _env_bool("DJANGO_DEBUG", False)

ALLOWED_HOSTS = [h for h in os.getenv("DJANGO_ALLOWED_HOSTS", "*").split(",") if h]


INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'rest_framework',
    'countries',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
]

ROOT_URLCONF = 'country_currency.urls'

WSGI_APPLICATION = 'country_currency.wsgi.application'


DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': os.getenv("SQLITE_PATH", str(BASE_DIR / 'db.sqlite3')),
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = False
USE_TZ = True

APPEND_SLASH = False

REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [],
    'DEFAULT_RENDERER_CLASSES': ['rest_framework.renderers.JSONRenderer'],
    'UNAUTHENTICATED_USER': None,
}


# Country refresh pipeline

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
CACHE_DIR = os.getenv("CACHE_DIR", "cache")

COUNTRIES_API_URL = os.getenv(
    "COUNTRIES_API_URL",
    "https://restcountries.com/v2/all?fields=name,capital,region,population,flag,currencies",
)
EXCHANGE_API_URL = os.getenv("EXCHANGE_API_URL", "https://open.er-api.com/v6/latest")
EXCHANGE_BASE_CURRENCY = os.getenv("EXCHANGE_BASE_CURRENCY", "USD")
SOURCE_TIMEOUT = float(os.getenv("SOURCE_TIMEOUT", "10"))
UPSERT_CHUNK_SIZE = _env_int("UPSERT_CHUNK_SIZE", 100)
COUNTRIES_MULTIPLIER_SEED = _env_int("COUNTRIES_MULTIPLIER_SEED")


LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'standard': {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'standard',
        },
    },
    'loggers': {
        'countries': {
            'handlers': ['console'],
            'level': os.getenv("COUNTRIES_LOG_LEVEL", "INFO"),
            'propagate': True,
        },
    },
}
