"""Service test fixtures - UserManager over an in-memory recording store.

Invariants:
    - Every test gets a fresh FakeUserStore
    - seeded_store holds two users with distinct emails (ids 1 and 2)
"""

import pytest

from user_registry.core.domain_types import UserRecord
from user_registry.services.user_manager import UserManager
from tests.services.fake_user_store import FakeUserStore


@pytest.fixture
def store():
    return FakeUserStore()


@pytest.fixture
def seeded_store():
    return FakeUserStore([
        UserRecord(first_name="John", last_name="Doe", email="john.doe@example.com"),
        UserRecord(first_name="Jane", last_name="Roe", email="jane.roe@example.com"),
    ])


@pytest.fixture
def manager(store):
    return UserManager(store)


@pytest.fixture
def seeded_manager(seeded_store):
    return UserManager(seeded_store)
