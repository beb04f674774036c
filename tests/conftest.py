"""Pytest configuration shared across test modules."""

import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "sitekit_build.settings")
os.environ.setdefault("SITEKIT_PRODUCTION", "false")
