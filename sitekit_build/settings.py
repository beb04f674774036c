"""
Django settings for the sitekit build.

Django only hosts the template engine here: there are no models, views or
middleware. The settings carry the build-mode switch, the location of the
data files the webmention and ranking filters read, and logging.

Please consult the Django documentation for additional configuration
options: https://docs.djangoproject.com/en/4.2/ref/settings/
"""

from __future__ import annotations

import os
from pathlib import Path

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# Nothing is signed during a build, but Django refuses to start without one.
SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'sitekit-build-only')

DEBUG = os.getenv('DJANGO_DEBUG', 'false').lower() == 'true'

ALLOWED_HOSTS: list[str] = []

INSTALLED_APPS = [
    'sitekit',
]

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'builtins': ['sitekit.templatetags.sitekit'],
        },
    },
]

DATABASES: dict[str, dict[str, object]] = {}

# Internationalization
# https://docs.djangoproject.com/en/4.2/topics/i18n/

LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'UTC'

USE_I18N = False

USE_TZ = True

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# Build inputs
# Production builds drop pages tagged "draft" from collections and rankings.
SITEKIT_PRODUCTION = os.getenv('SITEKIT_PRODUCTION', 'false').lower() == 'true'

# Holds webmentions.json, webmentionsBlockList.json and analytics.json.
SITEKIT_DATA_DIR = Path(os.getenv('SITEKIT_DATA_DIR', BASE_DIR / '_data'))

# Optional YAML file merged over sitekit.engine.config.DEFAULTS.
SITEKIT_ENGINE_CONFIG = os.getenv('SITEKIT_ENGINE_CONFIG') or None


log_level = os.getenv('SITEKIT_LOG_LEVEL', 'INFO').upper()
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'build': {
            'format': '[sitekit] %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'build',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': log_level,
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': log_level,
            'propagate': False,
        },
        'sitekit': {
            'handlers': ['console'],
            'level': log_level,
            'propagate': False,
        },
    },
}
