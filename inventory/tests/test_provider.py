"""Tests for the path-addressed store operations."""

import pytest

from ..contract import CONTENT_ITEM_TYPE, CONTENT_LIST_TYPE
from ..errors import UnknownResource, ValidationError
from ..notifications import ChangeEvent
from .samples import GREATEST_CLIMBS

def test_insert_returns_item_path(store):
    path = store.insert('/products', GREATEST_CLIMBS)
    assert path.startswith('/products/')
    [record] = store.query(path)
    assert record.name == 'Greatest climbs'

def test_insert_rejects_item_path(store):
    with pytest.raises(UnknownResource):
        store.insert('/products/1', GREATEST_CLIMBS)

def test_query_collection(populated_store):
    records = list(populated_store.query(
        '/products',
        projection=['_id', 'name', 'price', 'quantity'],
        sort_order='price'
    ))
    assert [r.price for r in records] == [10, 25, 40]
    assert records[0].supplier_name is None

def test_query_item_ignores_other_records(populated_store):
    assert list(populated_store.query('/products/999')) == []
    [record] = populated_store.query('/products/2')
    assert record.id == 2

def test_query_unknown_path(store):
    with pytest.raises(UnknownResource):
        store.query('/suppliers')

def test_update_at_item(store, events):
    product_id = store.create(GREATEST_CLIMBS)
    events.clear()
    assert store.update_at(f'/products/{product_id}', {'price': 11}) == 1
    assert store.get(product_id).price == 11
    assert events == [ChangeEvent(f'/products/{product_id}', product_id)]

def test_update_at_collection_with_filters(populated_store):
    rows = populated_store.update_at(
        '/products',
        {'supplier_phone': '4150000000'},
        filters={'supplier': 'Frances Lincoln'}
    )
    assert rows == 2
    phones = {r.supplier_phone for r in populated_store.list(filters={'supplier_name': 'Frances Lincoln'})}
    assert phones == {'4150000000'}

def test_update_at_validates(populated_store):
    with pytest.raises(ValidationError):
        populated_store.update_at('/products', {'quantity': -3})
    assert populated_store.count(filters={'quantity': -3}) == 0

def test_update_at_collection_without_fields(populated_store):
    assert populated_store.update_at('/products', {}) == 0

def test_delete_at_item(populated_store):
    assert populated_store.delete_at('/products/1') == 1
    assert populated_store.delete_at('/products/1') == 0
    assert populated_store.count() == 2

def test_delete_at_collection_with_filters(populated_store):
    assert populated_store.delete_at('/products', filters={'supplier_name': 'Vertebrate'}) == 1
    assert populated_store.count() == 2

def test_delete_at_collection_deletes_everything(populated_store):
    assert populated_store.delete_at('/products') == 3
    assert populated_store.count() == 0

def test_filtered_item_operations_rejected(populated_store):
    with pytest.raises(UnknownResource):
        populated_store.delete_at('/products/1', filters={'name': 'x'})
    with pytest.raises(UnknownResource):
        populated_store.update_at('/products/1', {'price': 1}, filters={'name': 'x'})

def test_get_type(store):
    assert store.get_type('/products') == CONTENT_LIST_TYPE
    assert store.get_type('/products/3') == CONTENT_ITEM_TYPE
    with pytest.raises(UnknownResource):
        store.get_type('/nothing')

def test_item_path_with_oversized_id(populated_store):
    """A well-formed item path whose id cannot be stored fails validation."""
    path = '/products/99999999999999999999'
    with pytest.raises(ValidationError):
        list(populated_store.query(path))
    with pytest.raises(ValidationError):
        populated_store.delete_at(path)
    assert populated_store.count() == 3
