"""Shared test fixtures and utilities."""

import csv

import pytest

from ..db.session import SessionManager
from ..store import InventoryStore
from .samples import GREATEST_CLIMBS

@pytest.fixture
def database_url(tmp_path):
    """File-backed SQLite database unique to each test."""
    return f"sqlite:///{tmp_path / 'inventory.db'}"

@pytest.fixture
def session_manager(database_url):
    """Create a session manager for testing."""
    manager = SessionManager(database_url)
    yield manager
    manager.dispose()

@pytest.fixture
def store(session_manager):
    """Empty inventory store with its schema created."""
    return InventoryStore(session_manager)

@pytest.fixture
def populated_store(store):
    """Store holding three products from two suppliers."""
    store.create(GREATEST_CLIMBS)
    store.create({
        'name': 'Alpine journal',
        'price': 25,
        'quantity': 0,
        'supplier_name': 'Vertebrate',
        'supplier_phone': '01142677844'
    })
    store.create({
        'name': 'Big walls',
        'price': 40,
        'quantity': 3,
        'supplier_name': 'Frances Lincoln',
        'supplier_phone': '4154547890'
    })
    return store

@pytest.fixture
def events(store):
    """Collect change events delivered to a collection observer."""
    received = []
    subscription = store.subscribe(received.append)
    yield received
    subscription.unsubscribe()

@pytest.fixture
def write_csv(tmp_path):
    """Write rows to a CSV file under the test's temporary directory."""
    written = []

    def _write(rows, fieldnames=('name', 'price', 'quantity', 'supplier', 'phone')):
        path = tmp_path / f'products_{len(written)}.csv'
        with open(path, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=list(fieldnames))
            writer.writeheader()
            for row in rows:
                writer.writerow(row)
        written.append(path)
        return path
    return _write
