"""
Processors for bulk work against the inventory store.
"""

from .base import BaseProcessor
from .error_tracker import ImportErrorLog
from .product_import import ProductImportProcessor

__all__ = ['BaseProcessor', 'ImportErrorLog', 'ProductImportProcessor']
