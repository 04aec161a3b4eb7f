"""Tests for the inventory command-line interface."""

import json

import pytest
from click.testing import CliRunner

from ..cli.main import cli
from ..store import InventoryStore

@pytest.fixture
def runner():
    return CliRunner()

@pytest.fixture
def invoke(runner, database_url):
    """Invoke the CLI against the test database."""
    def _invoke(*args, **kwargs):
        return runner.invoke(cli, ['--database-url', database_url, *args], **kwargs)
    return _invoke

@pytest.fixture
def cli_store(database_url):
    store = InventoryStore.from_url(database_url)
    yield store
    store.session_manager.dispose()

def test_init_db(invoke):
    result = invoke('init-db')
    assert result.exit_code == 0
    assert 'Inventory database ready (0 products)' in result.output

def test_test_connection(invoke):
    result = invoke('test-connection')
    assert result.exit_code == 0
    assert 'Successfully connected' in result.output

def test_add_and_show(invoke):
    result = invoke('add', '--name', 'Greatest climbs', '--price', '10', '--quantity', '100',
                    '--supplier', 'Frances Lincoln', '--phone', '4154547890')
    assert result.exit_code == 0
    assert 'Created product 1 at /products/1' in result.output

    result = invoke('show', '1')
    assert result.exit_code == 0
    assert 'Product 1: Greatest climbs' in result.output
    assert 'too short to dial' not in result.output

def test_show_flags_short_phone(invoke, cli_store):
    product_id = cli_store.create({'name': 'Book', 'supplier_name': 'S', 'supplier_phone': '555'})
    result = invoke('show', str(product_id))
    assert '(too short to dial)' in result.output

def test_add_rejects_negative_price(invoke, cli_store):
    result = invoke('add', '--name', 'Book', '--price=-1', '--supplier', 'S', '--phone', '1')
    assert result.exit_code != 0
    assert 'Invalid price: must not be negative' in result.output
    assert cli_store.count() == 0

def test_show_missing_product(invoke):
    result = invoke('show', '42')
    assert result.exit_code != 0
    assert 'Product 42 not found' in result.output

def test_list_json(invoke, cli_store):
    cli_store.insert_dummy()
    result = invoke('--json', 'list')
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload[0]['name'] == 'Greatest climbs'
    assert payload[0]['supplier_name'] == 'Frances Lincoln'

def test_list_text(invoke, cli_store):
    result = invoke('list')
    assert 'No products in inventory' in result.output

    cli_store.insert_dummy()
    result = invoke('list', '--sort', 'name')
    assert '1 products in inventory' in result.output
    assert 'Greatest climbs' in result.output

def test_update_and_sell(invoke, cli_store):
    product_id = cli_store.insert_dummy()

    result = invoke('update', str(product_id), '--quantity', '1')
    assert result.exit_code == 0
    assert f'Updated product {product_id}' in result.output

    result = invoke('sell', str(product_id))
    assert '0 left' in result.output
    result = invoke('sell', str(product_id))
    assert 'out of stock' in result.output

def test_update_nothing(invoke, cli_store):
    product_id = cli_store.insert_dummy()
    result = invoke('update', str(product_id))
    assert 'Nothing to update' in result.output

def test_restock(invoke, cli_store):
    product_id = cli_store.insert_dummy()
    result = invoke('restock', str(product_id), '--amount', '5')
    assert result.exit_code == 0
    assert 'now has 105 in stock' in result.output

    result = invoke('restock', str(product_id), '--amount=-500')
    assert result.exit_code != 0
    assert 'Invalid quantity' in result.output

def test_delete_and_delete_all(invoke, cli_store):
    first = cli_store.insert_dummy()
    cli_store.insert_dummy()

    result = invoke('delete', str(first))
    assert f'Deleted product {first}' in result.output
    result = invoke('delete', str(first))
    assert 'not found' in result.output

    result = invoke('delete-all', '--yes')
    assert '1 rows deleted' in result.output
    assert cli_store.count() == 0

def test_insert_dummy(invoke, cli_store):
    result = invoke('insert-dummy')
    assert result.exit_code == 0
    assert cli_store.count() == 1

def test_import_products(invoke, cli_store, tmp_path, write_csv):
    path = write_csv([
        {'name': 'Greatest climbs', 'price': '10', 'quantity': '100',
         'supplier': 'Frances Lincoln', 'phone': '4154547890'},
        {'name': '', 'price': '1', 'quantity': '1', 'supplier': 'S', 'phone': '1'},
    ])
    output = tmp_path / 'results.json'
    result = invoke('import-products', str(path), '--output', str(output))

    assert result.exit_code == 1
    assert 'Created: 1' in result.output
    assert 'Rejected: 1' in result.output
    assert cli_store.count() == 1

    saved = json.loads(output.read_text())
    assert saved['summary']['errors']['counts'] == {'name': 1}

def test_command_errors_are_reported_once(invoke):
    result = invoke('show', '42')
    assert result.output.count('Product 42 not found') == 1
