"""
Django settings for the storefront middleware.

Everything environment specific is read from environment variables; a local
``.env`` file is loaded first when present.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / ".env")


def env_bool(name: str, default: bool = False) -> bool:
    return os.environ.get(name, str(default)).lower() in ("1", "true", "yes", "on")


SECRET_KEY = os.environ.get("SECRET_KEY")
if not SECRET_KEY:
    raise RuntimeError("SECRET_KEY environment variable is required")

DEBUG = env_bool("DEBUG")

ALLOWED_HOSTS = [host for host in os.environ.get("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if host]

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.staticfiles",
    "rest_framework",
    "drf_spectacular",
    "marketplace.apps.MarketplaceConfig",
    "payment_system.apps.PaymentSystemConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "storefrontBackend.urls"
WSGI_APPLICATION = "storefrontBackend.wsgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {"context_processors": ["django.template.context_processors.request"]},
    },
]

# Every record lives on the commerce platform; the database only backs Django internals
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

CACHES = {
    "default": {
        "BACKEND": os.environ.get("CACHE_BACKEND", "django.core.cache.backends.locmem.LocMemCache"),
        "LOCATION": os.environ.get("CACHE_LOCATION", "storefront"),
    }
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ==============================================================================
# REST API
# ==============================================================================

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": ["authentication.backends.BearerTokenAuthentication"],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.IsAuthenticated"],
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "UNAUTHENTICATED_USER": None,
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Storefront Middleware API",
    "DESCRIPTION": "Buyer management, buyer-priced catalog and payment reconciliation over the commerce platform",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "SERVE_PERMISSIONS": ["rest_framework.permissions.AllowAny"],
    "SERVE_AUTHENTICATION": [],
}

# ==============================================================================
# Commerce platform & infrastructure
# ==============================================================================

COMMERCE = {
    "API_URL": os.environ.get("COMMERCE_API_URL", "https://api.ordercloud.io/v1"),
    "AUTH_URL": os.environ.get("COMMERCE_AUTH_URL", "https://auth.ordercloud.io"),
    "CLIENT_ID": os.environ.get("COMMERCE_CLIENT_ID", ""),
    "CLIENT_SECRET": os.environ.get("COMMERCE_CLIENT_SECRET", ""),
    "SCOPES": os.environ.get("COMMERCE_SCOPES", "FullAccess"),
    "MARKETPLACE_ID": os.environ.get("COMMERCE_MARKETPLACE_ID", ""),
    "BASE_CURRENCY": os.environ.get("COMMERCE_BASE_CURRENCY", "USD"),
    "BUYER_SECURITY_PROFILE_ID": os.environ.get("COMMERCE_BUYER_SECURITY_PROFILE_ID", "BaseBuyer"),
    "BUYER_MESSAGE_SENDER_ID": os.environ.get("COMMERCE_BUYER_MESSAGE_SENDER_ID", "BuyerEmails"),
    "SUPPLIER_CONTACT_EMAIL": os.environ.get("SUPPLIER_CONTACT_EMAIL", ""),
    "TIMEOUT": float(os.environ.get("COMMERCE_TIMEOUT", "30")),
}

INFRASTRUCTURE = {
    "COMMERCE_CLIENT": os.environ.get("COMMERCE_CLIENT", "ordercloud"),
    "EXCHANGE_RATE_PROVIDER": os.environ.get("EXCHANGE_RATE_PROVIDER", "http"),
    "CARD_PROCESSOR": os.environ.get("CARD_PROCESSOR", "stripe"),
    "EMAIL_BACKEND_TYPE": os.environ.get("EMAIL_BACKEND_TYPE", "smtp"),
}

# Buyer markups are cached per buyer; markup changes show up once the entry expires
MARKUP_CACHE_TIMEOUT = int(os.environ.get("MARKUP_CACHE_TIMEOUT", "3600"))

EXCHANGE_RATE_API_URL = os.environ.get("EXCHANGE_RATE_API_URL", "https://api.exchangerate-api.com/v4/latest/")

STRIPE_SECRET_KEY = os.environ.get("STRIPE_SECRET_KEY", "")

# ==============================================================================
# Email
# ==============================================================================

EMAIL_BACKEND = os.environ.get("EMAIL_BACKEND", "django.core.mail.backends.smtp.EmailBackend")
EMAIL_HOST = os.environ.get("EMAIL_HOST", "localhost")
EMAIL_PORT = int(os.environ.get("EMAIL_PORT", "587"))
EMAIL_HOST_USER = os.environ.get("EMAIL_HOST_USER", "")
EMAIL_HOST_PASSWORD = os.environ.get("EMAIL_HOST_PASSWORD", "")
EMAIL_USE_TLS = env_bool("EMAIL_USE_TLS", True)
DEFAULT_FROM_EMAIL = os.environ.get("DEFAULT_FROM_EMAIL", "noreply@example.com")

# ==============================================================================
# Observability
# ==============================================================================

OTEL_TRACING_ENABLED = env_bool("OTEL_TRACING_ENABLED", True)
OTEL_CONSOLE_EXPORT = env_bool("OTEL_CONSOLE_EXPORT")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

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
    "root": {"handlers": ["console"], "level": LOG_LEVEL},
    "loggers": {
        "django": {"handlers": ["console"], "level": "WARNING", "propagate": False},
        "infrastructure": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "marketplace": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "payment_system": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
    },
}
