"""
Product commands for the inventory CLI.
Each command is a thin caller of one store operation.
"""

import click
from typing import Any, Dict, Optional

from ...cli.base import BaseCommand, command_error_handler
from ...cli.config import Config
from ...contract import item_path
from ...records import ProductRecord

def _format_line(record: ProductRecord) -> str:
    stock = f"{record.quantity} in stock" if record.in_stock else "out of stock"
    return f"  {record.id:>5}  {record.name}  ${record.price}  ({stock})"

class ListProductsCommand(BaseCommand):
    """List products in the inventory."""

    def __init__(self, config: Config, sort_order: Optional[str] = None, supplier: Optional[str] = None):
        super().__init__(config)
        self.sort_order = sort_order
        self.supplier = supplier

    @command_error_handler
    def execute(self) -> None:
        filters = {'supplier_name': self.supplier} if self.supplier else None
        records = list(self.store.list(sort_order=self.sort_order, filters=filters))

        if self.json_output:
            self.emit([record.to_dict() for record in records])
            return
        if not records:
            click.echo("No products in inventory")
            return

        click.echo(f"\n{len(records)} products in inventory:")
        for record in records:
            click.echo(_format_line(record))

class ShowProductCommand(BaseCommand):
    """Show every field of one product."""

    def __init__(self, config: Config, product_id: int):
        super().__init__(config)
        self.product_id = product_id

    @command_error_handler
    def execute(self) -> None:
        record = self.store.get(self.product_id)
        dialable = record.is_dialable()
        payload = dict(record.to_dict(), path=item_path(record.id), dialable=dialable)
        self.emit(payload, "\n".join([
            f"Product {record.id}: {record.name}",
            f"  Price:          {record.price}",
            f"  Quantity:       {record.quantity}",
            f"  Supplier:       {record.supplier_name}",
            f"  Supplier phone: {record.supplier_phone}"
            + ("" if dialable else " (too short to dial)"),
        ]))

class AddProductCommand(BaseCommand):
    """Create a product."""

    def __init__(self, config: Config, fields: Dict[str, Any]):
        super().__init__(config)
        self.fields = fields

    @command_error_handler
    def execute(self) -> int:
        product_id = self.store.create(self.fields)
        self.emit({'id': product_id, 'path': item_path(product_id)},
                  f"Created product {product_id} at {item_path(product_id)}")
        return product_id

class UpdateProductCommand(BaseCommand):
    """Change some fields of a product."""

    def __init__(self, config: Config, product_id: int, fields: Dict[str, Any]):
        super().__init__(config)
        self.product_id = product_id
        self.fields = fields

    @command_error_handler
    def execute(self) -> int:
        if not self.fields:
            self.emit({'updated': 0}, "Nothing to update")
            return 0

        rows = self.store.update(self.product_id, self.fields)
        if rows:
            self.emit({'updated': rows}, f"Updated product {self.product_id}")
        else:
            self.emit({'updated': 0}, f"Product {self.product_id} not found")
        return rows

class DeleteProductCommand(BaseCommand):
    """Delete one product."""

    def __init__(self, config: Config, product_id: int):
        super().__init__(config)
        self.product_id = product_id

    @command_error_handler
    def execute(self) -> int:
        rows = self.store.delete(self.product_id)
        if rows:
            self.emit({'deleted': rows}, f"Deleted product {self.product_id}")
        else:
            self.emit({'deleted': 0}, f"Product {self.product_id} not found")
        return rows

class DeleteAllProductsCommand(BaseCommand):
    """Delete every product."""

    @command_error_handler
    def execute(self) -> int:
        rows = self.store.delete_all()
        self.emit({'deleted': rows}, f"{rows} rows deleted from products database")
        return rows

class SellProductCommand(BaseCommand):
    """Record the sale of one unit."""

    def __init__(self, config: Config, product_id: int):
        super().__init__(config)
        self.product_id = product_id

    @command_error_handler
    def execute(self) -> int:
        rows = self.store.sell(self.product_id)
        if rows:
            record = self.store.get(self.product_id, projection=['quantity'])
            self.emit({'sold': 1, 'quantity': record.quantity},
                      f"Sold one unit of product {self.product_id}, {record.quantity} left")
        else:
            self.emit({'sold': 0}, f"Product {self.product_id} is out of stock or does not exist")
        return rows

class RestockProductCommand(BaseCommand):
    """Add (or with a negative amount, remove) stock."""

    def __init__(self, config: Config, product_id: int, amount: int = 1):
        super().__init__(config)
        self.product_id = product_id
        self.amount = amount

    @command_error_handler
    def execute(self) -> int:
        rows = self.store.restock(self.product_id, self.amount)
        if rows:
            record = self.store.get(self.product_id, projection=['quantity'])
            self.emit({'restocked': 1, 'quantity': record.quantity},
                      f"Product {self.product_id} now has {record.quantity} in stock")
        else:
            self.emit({'restocked': 0}, f"Product {self.product_id} unchanged")
        return rows

class InsertDummyProductCommand(BaseCommand):
    """Insert the sample product."""

    @command_error_handler
    def execute(self) -> int:
        product_id = self.store.insert_dummy()
        self.emit({'id': product_id}, f"Inserted sample product {product_id}")
        return product_id

class InitDatabaseCommand(BaseCommand):
    """Create the products table."""

    @command_error_handler
    def execute(self) -> None:
        count = self.store.count()
        self.emit({'database_url': self.config.database_url, 'products': count},
                  f"Inventory database ready ({count} products)")

__all__ = [
    'ListProductsCommand',
    'ShowProductCommand',
    'AddProductCommand',
    'UpdateProductCommand',
    'DeleteProductCommand',
    'DeleteAllProductsCommand',
    'SellProductCommand',
    'RestockProductCommand',
    'InsertDummyProductCommand',
    'InitDatabaseCommand'
]
