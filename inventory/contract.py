"""Resource addressing and persisted schema names for the products collection.

Paths come in two shapes:

    /products          the collection endpoint (all products)
    /products/{id}     the item endpoint (one product)

The ``content://<authority>/...`` form used by the Android provider is
accepted as well, so paths stored by older clients keep resolving.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import UnknownResource

CONTENT_AUTHORITY = 'com.example.android.bookstoreinventory'
BASE_CONTENT_URI = f'content://{CONTENT_AUTHORITY}'
PATH_PRODUCTS = 'products'
COLLECTION_PATH = f'/{PATH_PRODUCTS}'

CONTENT_LIST_TYPE = f'vnd.android.cursor.dir/{CONTENT_AUTHORITY}/{PATH_PRODUCTS}'
CONTENT_ITEM_TYPE = f'vnd.android.cursor.item/{CONTENT_AUTHORITY}/{PATH_PRODUCTS}'

# Persisted schema
TABLE_NAME = 'products'
COLUMN_ID = '_id'
COLUMN_PRODUCT_NAME = 'name'
COLUMN_PRICE = 'price'
COLUMN_QUANTITY = 'quantity'
COLUMN_SUPPLIER_NAME = 'supplier'
COLUMN_SUPPLIER_PHONE_NUMBER = 'phone'

# Model attribute -> column name
COLUMNS = {
    'id': COLUMN_ID,
    'name': COLUMN_PRODUCT_NAME,
    'price': COLUMN_PRICE,
    'quantity': COLUMN_QUANTITY,
    'supplier_name': COLUMN_SUPPLIER_NAME,
    'supplier_phone': COLUMN_SUPPLIER_PHONE_NUMBER,
}

# Column name / camelCase alias -> model attribute
ATTRIBUTE_ALIASES = {column: attr for attr, column in COLUMNS.items()}
ATTRIBUTE_ALIASES.update({
    'id': 'id',
    'supplierName': 'supplier_name',
    'supplierPhone': 'supplier_phone',
})
ATTRIBUTE_ALIASES.update({attr: attr for attr in COLUMNS})


class Endpoint(Enum):
    """Kinds of resource a path can address."""
    PRODUCTS = 100
    PRODUCT_ID = 101


@dataclass(frozen=True)
class ResourceMatch:
    """Result of matching a path against the lookup table."""
    endpoint: Endpoint
    path: str
    product_id: Optional[int] = None

    @property
    def is_item(self) -> bool:
        return self.endpoint is Endpoint.PRODUCT_ID


_PATTERNS = (
    (re.compile(rf'^/{PATH_PRODUCTS}/?$'), Endpoint.PRODUCTS),
    (re.compile(rf'^/{PATH_PRODUCTS}/(\d+)/?$'), Endpoint.PRODUCT_ID),
)

_CONTENT_TYPES = {
    Endpoint.PRODUCTS: CONTENT_LIST_TYPE,
    Endpoint.PRODUCT_ID: CONTENT_ITEM_TYPE,
}


def _strip_authority(path: str) -> str:
    if path.startswith(BASE_CONTENT_URI):
        return path[len(BASE_CONTENT_URI):] or '/'
    return path


def match(path: str) -> ResourceMatch:
    """Map a resource path to the endpoint it addresses.

    Raises:
        UnknownResource: If the path matches neither endpoint
    """
    if not isinstance(path, str):
        raise UnknownResource(repr(path))

    normalized = _strip_authority(path.strip())
    for pattern, endpoint in _PATTERNS:
        found = pattern.match(normalized)
        if not found:
            continue
        if endpoint is Endpoint.PRODUCT_ID:
            return ResourceMatch(endpoint, path, int(found.group(1)))
        return ResourceMatch(endpoint, path)

    raise UnknownResource(path)


def item_path(product_id: int) -> str:
    """Build the item endpoint path for a product id."""
    return f'{COLLECTION_PATH}/{int(product_id)}'


def content_type(path: str) -> str:
    """Return the list or item content type for a path."""
    return _CONTENT_TYPES[match(path).endpoint]


def resolve_attribute(name: str) -> str:
    """Resolve a column name or alias to the model attribute name.

    Raises:
        KeyError: If the name is not a known product field
    """
    return ATTRIBUTE_ALIASES[name]
