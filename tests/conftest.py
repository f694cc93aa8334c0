"""Shared fixtures: in-memory cache DB, fake clock, fake fetchers."""

import pytest

from app.models import DomainKey
from app.repositories import DAY, MEMORY, ExpiringStore, connect
from app.tasks import DetachedTasks
from tests.helpers import CLASSES, STUDENTS, FakeClock, FakeFetcher


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def conn():
    db = connect(MEMORY)
    yield db
    db.close()


@pytest.fixture
def tasks():
    return DetachedTasks()


@pytest.fixture
def store(conn, tasks, clock):
    return ExpiringStore(conn, tasks, ttl=10 * DAY, clock=clock)


@pytest.fixture
def fetchers():
    return {
        DomainKey.CLASSES: FakeFetcher(CLASSES),
        DomainKey.STUDENTS: FakeFetcher(STUDENTS),
        DomainKey.DASHBOARD: FakeFetcher({"todayClasses": 2}),
        DomainKey.PROFILE: FakeFetcher({"name": "Teacher One"}),
    }
