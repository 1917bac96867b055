from pathlib import Path
import os

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("PEERCALL_SECRET_KEY", "unsafe-dev-secret-key")
DEBUG = os.environ.get("PEERCALL_DEBUG", "0") == "1"

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("PEERCALL_ALLOWED_HOSTS", "localhost,127.0.0.1,peercall_server").split(",")
    if host.strip()
]

INSTALLED_APPS = [
    "corsheaders",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.staticfiles",
    "api",
]

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

# TODO: restrict to the client origins once they are fixed
CORS_ALLOW_ALL_ORIGINS = True

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"

# Users and call logs live in Firebase Firestore; the Django database is unused by app data
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.BCryptSHA256PasswordHasher",
    "django.contrib.auth.hashers.PBKDF2PasswordHasher",
]

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# Profile pictures
MEDIA_URL = "/uploads/"
MEDIA_ROOT = Path(os.environ.get("PEERCALL_MEDIA_ROOT", BASE_DIR / "uploads"))

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
USE_X_FORWARDED_HOST = True

# Auth tokens
JWT_SECRET = os.environ.get("PEERCALL_JWT_SECRET", "unsafe-dev-jwt-secret-change-me-in-production")
JWT_ALGORITHM = "HS256"
TOKEN_EXPIRE_SECONDS = int(os.environ.get("PEERCALL_TOKEN_EXPIRE_SECONDS", 7 * 86400))

# Socket.IO signaling
SOCKETIO_ASYNC_MODE = os.environ.get("PEERCALL_SOCKETIO_ASYNC_MODE", "threading")
_socketio_origins = os.environ.get("PEERCALL_SOCKETIO_CORS_ORIGINS", "*")
SOCKETIO_CORS_ORIGINS = (
    "*" if _socketio_origins == "*"
    else [origin.strip() for origin in _socketio_origins.split(",") if origin.strip()]
)

# Logging Configuration
LOG_DIR = BASE_DIR / "logs"
LOG_DIR.mkdir(exist_ok=True)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "[{asctime}] {levelname} {name} {message}",
            "style": "{",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
        "simple": {
            "format": "[{asctime}] {levelname} {message}",
            "style": "{",
            "datefmt": "%H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
        "file": {
            "class": "logging.FileHandler",
            "filename": LOG_DIR / "django.log",
            "formatter": "verbose",
        },
        "api_file": {
            "class": "logging.FileHandler",
            "filename": LOG_DIR / "api.log",
            "formatter": "verbose",
        },
        "signaling_file": {
            "class": "logging.FileHandler",
            "filename": LOG_DIR / "signaling.log",
            "formatter": "verbose",
        },
    },
    "loggers": {
        "django": {
            "handlers": ["console", "file"],
            "level": "INFO",
        },
        "django.request": {
            "handlers": ["console", "file"],
            "level": "DEBUG",
            "propagate": False,
        },
        "api": {
            "handlers": ["console", "api_file"],
            "level": "DEBUG",
            "propagate": False,
        },
        "signaling": {
            "handlers": ["console", "signaling_file"],
            "level": os.environ.get("PEERCALL_SIGNALING_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
