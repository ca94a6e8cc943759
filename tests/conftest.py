"""Shared fixtures: an in-memory store with the shop schema applied."""

import pytest

from mechanic_shop.app.core.db import DataStore, init_db


@pytest.fixture
def store():
    with DataStore(":memory:") as store:
        init_db(store)
        yield store
