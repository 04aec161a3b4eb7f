"""Partial field sets for creating and updating products."""

import numbers
from dataclasses import dataclass, fields as dataclass_fields
from typing import Any, Dict, Mapping, Union

from .contract import resolve_attribute
from .errors import ValidationError


class _Missing:
    """Marker for a field that was not supplied."""

    def __repr__(self) -> str:
        return 'MISSING'

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

TEXT_FIELDS = ('name', 'supplier_name', 'supplier_phone')
COUNT_FIELDS = ('price', 'quantity')
DEFAULTS = {'price': 0, 'quantity': 0}

# SQLite INTEGER is a signed 64-bit value
MAX_INTEGER = 2**63 - 1
MIN_INTEGER = -2**63


@dataclass(frozen=True)
class ProductFields:
    """Product fields, each independently present or absent.

    Absent fields are left at ``MISSING``. On create, absent price and
    quantity fall back to 0; on update, absent fields keep their stored value.
    """
    name: Any = MISSING
    price: Any = MISSING
    quantity: Any = MISSING
    supplier_name: Any = MISSING
    supplier_phone: Any = MISSING

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> 'ProductFields':
        """Build from a mapping keyed by attribute names, column names or camelCase names."""
        kwargs = {}
        for key, value in values.items():
            try:
                attr = resolve_attribute(key)
            except KeyError:
                raise ValidationError(key, 'is not a product field') from None
            if attr == 'id':
                raise ValidationError('id', 'is assigned by the store')
            kwargs[attr] = value
        return cls(**kwargs)

    def present(self) -> Dict[str, Any]:
        """Return only the supplied fields."""
        return {
            f.name: getattr(self, f.name)
            for f in dataclass_fields(self)
            if getattr(self, f.name) is not MISSING
        }

    def is_empty(self) -> bool:
        return not self.present()

    def validated_for_create(self) -> Dict[str, Any]:
        """Validate a full record, applying defaults for price and quantity.

        Raises:
            ValidationError: On the first field that fails
        """
        values = dict(DEFAULTS)
        values.update(self.present())
        for name in TEXT_FIELDS:
            if name not in values:
                raise ValidationError(name, 'is required')
        return _validate(values)

    def validated_for_update(self) -> Dict[str, Any]:
        """Validate only the supplied fields.

        Raises:
            ValidationError: On the first field that fails
        """
        return _validate(self.present())


FieldsLike = Union[ProductFields, Mapping[str, Any]]


def as_fields(values: FieldsLike) -> ProductFields:
    """Coerce a mapping into ``ProductFields``; pass ``ProductFields`` through."""
    if isinstance(values, ProductFields):
        return values
    if values is None:
        return ProductFields()
    return ProductFields.from_mapping(values)


def _validate(values: Dict[str, Any]) -> Dict[str, Any]:
    cleaned = {}
    # name first, so an empty name is reported ahead of anything else
    for name in ('name', 'price', 'quantity', 'supplier_name', 'supplier_phone'):
        if name not in values:
            continue
        if name in TEXT_FIELDS:
            cleaned[name] = _clean_text(name, values[name])
        else:
            cleaned[name] = _clean_count(name, values[name])
    return cleaned


def _clean_text(name: str, value: Any) -> str:
    if value is None:
        raise ValidationError(name, 'is required')
    if not isinstance(value, str):
        value = str(value)
    value = value.strip()
    if not value:
        raise ValidationError(name, 'must not be empty')
    return value


def _clean_count(name: str, value: Any) -> int:
    if isinstance(value, bool) or value is None:
        raise ValidationError(name, 'must be an integer')
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(name, 'must be an integer')
        value = int(value)
    elif isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise ValidationError(name, 'must be an integer') from None
    elif isinstance(value, numbers.Integral):
        value = int(value)
    else:
        raise ValidationError(name, 'must be an integer')
    if value < 0:
        raise ValidationError(name, 'must not be negative')
    return check_range(name, value)


def check_range(name: str, value: int) -> int:
    """Reject integers the database cannot store."""
    if not MIN_INTEGER <= value <= MAX_INTEGER:
        raise ValidationError(name, 'is out of range')
    return value
