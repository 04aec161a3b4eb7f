"""Tests for partial field sets and their validation."""

import numpy as np
import pytest

from ..errors import ValidationError
from ..fields import MISSING, ProductFields, as_fields

def test_present_skips_missing_fields():
    fields = ProductFields(name='Book', quantity=0)
    assert fields.present() == {'name': 'Book', 'quantity': 0}
    assert fields.price is MISSING
    assert not fields.is_empty()
    assert ProductFields().is_empty()

def test_from_mapping_resolves_aliases():
    fields = ProductFields.from_mapping({'supplier': 'S', 'phone': '123', 'supplierName': 'T'})
    assert fields.supplier_phone == '123'
    # later keys win when two spellings name the same field
    assert fields.supplier_name == 'T'

def test_as_fields_passthrough():
    fields = ProductFields(name='Book')
    assert as_fields(fields) is fields
    assert as_fields({'name': 'Book'}) == fields
    assert as_fields(None).is_empty()

def test_validated_for_create_defaults_and_strips():
    values = ProductFields(name='  Book ', supplier_name='S', supplier_phone=' 555 ').validated_for_create()
    assert values == {
        'name': 'Book',
        'price': 0,
        'quantity': 0,
        'supplier_name': 'S',
        'supplier_phone': '555'
    }

def test_validated_for_create_reports_name_first():
    """An empty name is reported ahead of other problems."""
    with pytest.raises(ValidationError) as exc_info:
        ProductFields(name='', price=-1, supplier_name='S', supplier_phone='1').validated_for_create()
    assert exc_info.value.field == 'name'
    assert exc_info.value.reason == 'must not be empty'

def test_validated_for_update_only_checks_present():
    assert ProductFields(quantity=3).validated_for_update() == {'quantity': 3}
    assert ProductFields().validated_for_update() == {}

@pytest.mark.parametrize('value, expected', [
    (5, 5),
    ('7', 7),
    (3.0, 3),
    (np.int64(4), 4),
])
def test_count_coercion(value, expected):
    assert ProductFields(price=value).validated_for_update() == {'price': expected}

@pytest.mark.parametrize('value', [True, None, 2.5, 'x', float('nan'), [1]])
def test_count_rejects_non_integers(value):
    with pytest.raises(ValidationError) as exc_info:
        ProductFields(quantity=value).validated_for_update()
    assert exc_info.value.field == 'quantity'
    assert exc_info.value.reason == 'must be an integer'

def test_validation_error_message():
    error = ValidationError('price', 'must not be negative')
    assert str(error) == 'Invalid price: must not be negative'

@pytest.mark.parametrize('value', [2**63, '9223372036854775808', 1e30])
def test_count_rejects_values_too_large_to_store(value):
    with pytest.raises(ValidationError) as exc_info:
        ProductFields(price=value).validated_for_update()
    assert exc_info.value.reason == 'is out of range'

def test_count_accepts_largest_storable_value():
    assert ProductFields(quantity=2**63 - 1).validated_for_update() == {'quantity': 2**63 - 1}
