"""
Django settings for Taskdesk project.

All environment variables are read here (and in config/database.py).
A local `.env` file is loaded first when present.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

from config.database import get_database_config

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / '.env', override=False)

SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'django-insecure-taskdesk-dev-key')

DEBUG = os.getenv('DEBUG', 'true').lower() == 'true'

ALLOWED_HOSTS = os.getenv('ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',')

# development | test | production
APP_ENV = os.getenv('APP_ENV', 'development').strip().lower()

INSTALLED_APPS = [
    'apps.core',
    'apps.tasks',
    'apps.browser',
]

# Tasks are stored through apps.core.db_service, not the Django ORM.
DATABASES = {}

TASKDESK_DATABASE = get_database_config(APP_ENV)

USE_TZ = True
TIME_ZONE = 'UTC'

# =============================================================================
# Logging
# =============================================================================
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        'apps': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}
