"""
Core CLI implementation for the inventory package.
"""

import click
from pathlib import Path
from typing import Any, Dict, Optional

from .config import Config
from .logging import setup_logging, get_logger
from ..commands.utils import TestConnectionCommand
from ..commands.products import (
    ListProductsCommand,
    ShowProductCommand,
    AddProductCommand,
    UpdateProductCommand,
    DeleteProductCommand,
    DeleteAllProductsCommand,
    SellProductCommand,
    RestockProductCommand,
    InsertDummyProductCommand,
    InitDatabaseCommand
)
from ..commands.products.import_products import ImportProductsCommand

def _run(ctx, command_cls, *args, **kwargs) -> Any:
    """Build and execute a command with the configuration stored on the context.

    Failures are reported by the command's own error handler.
    """
    command = command_cls(ctx.obj['config'], *args, **kwargs)
    return command.execute()

def _supplied(**options: Optional[Any]) -> Dict[str, Any]:
    """Keep only the options the user actually passed."""
    return {name: value for name, value in options.items() if value is not None}

@click.group()
@click.option('--debug', is_flag=True, help='Enable detailed debug output')
@click.option('--database-url', default=None, help='Database URL (overrides DATABASE_URL)')
@click.option('--json', 'as_json', is_flag=True, help='Print results as JSON')
@click.pass_context
def cli(ctx, debug: bool, database_url: Optional[str], as_json: bool):
    """Bookstore inventory CLI tool"""
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug

    try:
        config = Config.from_env()
        if database_url:
            config.database_url = database_url
        if as_json:
            config.output_format = 'json'
        config.validate()
    except Exception as e:
        click.echo(f"Error initializing configuration: {str(e)}", err=True)
        ctx.exit(1)

    setup_logging(debug=debug, level=config.log_level, log_dir=config.log_dir)
    logger = get_logger('cli')
    if debug:
        logger.debug("Debug mode enabled")
        logger.debug(f"Using database: {config.database_url}")

    ctx.obj['config'] = config

@cli.command('init-db')
@click.pass_context
def init_db(ctx):
    """Create the products table if it does not exist."""
    _run(ctx, InitDatabaseCommand)

@cli.command('test-connection')
@click.pass_context
def test_connection(ctx):
    """Test database connectivity"""
    _run(ctx, TestConnectionCommand)

@cli.command('list')
@click.option('--sort', 'sort_order', default=None, help='Sort order, e.g. "name" or "price DESC"')
@click.option('--supplier', default=None, help='Only products from this supplier')
@click.pass_context
def list_products(ctx, sort_order: Optional[str], supplier: Optional[str]):
    """List products in the inventory."""
    _run(ctx, ListProductsCommand, sort_order, supplier)

@cli.command('show')
@click.argument('product_id', type=int)
@click.pass_context
def show_product(ctx, product_id: int):
    """Show one product."""
    _run(ctx, ShowProductCommand, product_id)

@cli.command('add')
@click.option('--name', required=True, help='Product name')
@click.option('--price', type=int, default=None, help='Price in whole units (default 0)')
@click.option('--quantity', type=int, default=None, help='Units in stock (default 0)')
@click.option('--supplier', 'supplier_name', required=True, help='Supplier name')
@click.option('--phone', 'supplier_phone', required=True, help='Supplier phone number')
@click.pass_context
def add_product(ctx, name, price, quantity, supplier_name, supplier_phone):
    """Add a product."""
    fields = _supplied(name=name, price=price, quantity=quantity,
                       supplier_name=supplier_name, supplier_phone=supplier_phone)
    _run(ctx, AddProductCommand, fields)

@cli.command('update')
@click.argument('product_id', type=int)
@click.option('--name', default=None, help='New product name')
@click.option('--price', type=int, default=None, help='New price')
@click.option('--quantity', type=int, default=None, help='New quantity')
@click.option('--supplier', 'supplier_name', default=None, help='New supplier name')
@click.option('--phone', 'supplier_phone', default=None, help='New supplier phone number')
@click.pass_context
def update_product(ctx, product_id, name, price, quantity, supplier_name, supplier_phone):
    """Update some fields of a product."""
    fields = _supplied(name=name, price=price, quantity=quantity,
                       supplier_name=supplier_name, supplier_phone=supplier_phone)
    _run(ctx, UpdateProductCommand, product_id, fields)

@cli.command('delete')
@click.argument('product_id', type=int)
@click.pass_context
def delete_product(ctx, product_id: int):
    """Delete one product."""
    _run(ctx, DeleteProductCommand, product_id)

@cli.command('delete-all')
@click.confirmation_option(prompt='Delete all products?')
@click.pass_context
def delete_all_products(ctx):
    """Delete every product."""
    _run(ctx, DeleteAllProductsCommand)

@cli.command('sell')
@click.argument('product_id', type=int)
@click.pass_context
def sell_product(ctx, product_id: int):
    """Sell one unit of a product."""
    _run(ctx, SellProductCommand, product_id)

@cli.command('restock')
@click.argument('product_id', type=int)
@click.option('--amount', type=int, default=1, show_default=True, help='Units to add (negative to remove)')
@click.pass_context
def restock_product(ctx, product_id: int, amount: int):
    """Change the stock of a product."""
    _run(ctx, RestockProductCommand, product_id, amount)

@cli.command('insert-dummy')
@click.pass_context
def insert_dummy(ctx):
    """Insert a sample product."""
    _run(ctx, InsertDummyProductCommand)

@cli.command('import-products')
@click.argument('file', type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path))
@click.option('--output', type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
              help='Save import results to file')
@click.option('--batch-size', type=int, default=None, help='Number of rows to process per batch')
@click.pass_context
def import_products(ctx, file: Path, output: Optional[Path], batch_size: Optional[int]):
    """Import products from a CSV file."""
    exit_code = _run(ctx, ImportProductsCommand, file, output, batch_size)
    if exit_code:
        ctx.exit(exit_code)
