"""
Project-wide pytest hooks.

Fixtures live next to the tests that use them (each app's tests/conftest.py).
"""

import os
from pathlib import Path

import django
import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

# Test module name -> speed tier, for ``pytest -m unit`` and friends.
TIER_BY_FILE = {
    "test_integration.py": "e2e",
    "test_views.py": "integration",
    "test_services.py": "integration",
    "test_profit_service.py": "integration",
    "test_health.py": "integration",
    "test_models.py": "unit",
    "test_money.py": "unit",
    "test_derivation.py": "unit",
    "test_managers.py": "unit",
    "test_soft_delete_mixin.py": "unit",
    "test_state_transitions.py": "unit",
    "test_helpers.py": "unit",
    "test_exceptions.py": "unit",
}
TIERS = {"unit", "integration", "e2e"}


def pytest_configure():
    django.setup()

    from django.conf import settings

    # No rate limits and a cheap hasher under test.
    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []
    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {}
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]


def pytest_collection_modifyitems(items):
    """Mark each test with its tier unless it already carries one; unknown files count as integration."""
    for item in items:
        if TIERS & {marker.name for marker in item.iter_markers()}:
            continue
        tier = TIER_BY_FILE.get(Path(str(item.fspath)).name, "integration")
        item.add_marker(getattr(pytest.mark, tier))
