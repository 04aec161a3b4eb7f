"""Sample product data shared by the tests."""

GREATEST_CLIMBS = {
    'name': 'Greatest climbs',
    'price': 10,
    'quantity': 100,
    'supplier_name': 'Frances Lincoln',
    'supplier_phone': '4154547890'
}
