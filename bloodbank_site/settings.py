"""
Django settings for the blood bank console.

Nothing is persisted: there are no database connections and all records
live in memory for the duration of one console session.
"""
import os


def env_flag(name, default):
    return os.environ.get(name, str(default)).strip().lower() in ("1", "true", "yes", "on")


SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "dev-only-change-me")

DEBUG = env_flag("DJANGO_DEBUG", False)

ALLOWED_HOSTS = []

INSTALLED_APPS = [
    "bloodbank",
]

DATABASES = {}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# ------------------------ blood bank ------------------------
# Clear the terminal between menus (only ever done when stdout is a TTY)
BLOOD_BANK_CLEAR_SCREEN = env_flag("BLOOD_BANK_CLEAR_SCREEN", True)

BLOOD_BANK_LOG_LEVEL = os.environ.get("BLOOD_BANK_LOG_LEVEL", "WARNING").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "loggers": {
        "bloodbank": {
            "handlers": ["console"],
            "level": BLOOD_BANK_LOG_LEVEL,
            "propagate": False,
        },
    },
}
