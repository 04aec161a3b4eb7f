"""Bookstore inventory record store."""

from .contract import Endpoint, ResourceMatch, COLLECTION_PATH, item_path
from .errors import InventoryError, ValidationError, NotFound, StorageFailure, UnknownResource
from .fields import ProductFields, MISSING
from .notifications import ChangeEvent, ChangeNotifier, Subscription
from .records import ProductRecord
from .store import InventoryStore

__all__ = [
    'InventoryStore',
    'ProductFields',
    'ProductRecord',
    'MISSING',
    'ChangeEvent',
    'ChangeNotifier',
    'Subscription',
    'Endpoint',
    'ResourceMatch',
    'COLLECTION_PATH',
    'item_path',
    'InventoryError',
    'ValidationError',
    'NotFound',
    'StorageFailure',
    'UnknownResource'
]
