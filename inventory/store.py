"""Inventory store: durable CRUD over product records.

The store owns the ``products`` table. Callers address records by id, or by
resource path for the provider-style operations (``query``, ``insert``,
``update_at``, ``delete_at``, ``get_type``), and get detached
``ProductRecord`` snapshots back. Every effective mutation is followed by a
change notification; mutations that touch nothing stay silent.
"""

import logging
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Sequence, Union

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from .contract import Endpoint, COLUMNS, content_type, item_path, match, resolve_attribute
from .db.models import Product
from .db.session import SessionManager
from .errors import NotFound, StorageFailure, UnknownResource, ValidationError
from .fields import FieldsLike, as_fields, check_range
from .notifications import ChangeNotifier, Observer, Subscription
from .records import ProductRecord

SortOrder = Union[str, Sequence[str], None]
Projection = Optional[Iterable[str]]
Filters = Optional[Mapping[str, Any]]

DUMMY_PRODUCT = {
    'name': 'Greatest climbs',
    'price': 10,
    'quantity': 100,
    'supplier_name': 'Frances Lincoln',
    'supplier_phone': '4154547890',
}


class InventoryStore:
    """CRUD, validation and change notification over product records."""

    def __init__(
        self,
        session_manager: SessionManager,
        notifier: Optional[ChangeNotifier] = None,
        create_schema: bool = True
    ):
        """Initialize the store.

        Args:
            session_manager: Database session manager
            notifier: Observer registry; a private one is created when omitted
            create_schema: Create the products table if missing
        """
        self.session_manager = session_manager
        self.notifier = notifier or ChangeNotifier()
        self.logger = logging.getLogger(self.__class__.__name__)
        if create_schema:
            self.session_manager.create_schema()

    @classmethod
    def from_url(cls, database_url: str, **kwargs) -> 'InventoryStore':
        """Open a store on a SQLAlchemy database URL."""
        return cls(SessionManager(database_url), **kwargs)

    def subscribe(self, callback: Observer, product_id: Optional[int] = None) -> Subscription:
        """Register for change events on the collection or a single product."""
        return self.notifier.subscribe(callback, product_id)

    # Record operations

    def create(self, fields: FieldsLike) -> int:
        """Persist a new product and return its id.

        Raises:
            ValidationError: If a required field is missing or a value is invalid
            StorageFailure: If the engine rejects the insert
        """
        values = as_fields(fields).validated_for_create()

        with self.session_manager as session:
            product = Product(**values)
            session.add(product)
            session.flush()
            product_id = product.id
            if product_id is None:
                raise StorageFailure('create')

        self.logger.info(f"Created product {product_id} ({values['name']})")
        self.notifier.notify()
        return product_id

    def get(self, product_id: int, projection: Projection = None) -> ProductRecord:
        """Fetch one product.

        Raises:
            NotFound: If no product has this id
        """
        product_id = _coerce_id(product_id)
        record = next(self.list(projection=projection, filters={'id': product_id}), None)
        if record is None:
            raise NotFound(product_id)
        return record

    def list(
        self,
        sort_order: SortOrder = None,
        projection: Projection = None,
        filters: Filters = None
    ) -> Iterator[ProductRecord]:
        """Iterate over products, optionally filtered, projected and sorted.

        Arguments are checked up front; rows are read lazily. Every call
        returns a fresh iterator over the current contents.

        Raises:
            ValidationError: If a projection, filter or sort names an unknown field
        """
        columns = _projection_columns(projection)
        criteria = _filter_criteria(filters)
        ordering = _order_by(sort_order)
        return self._iterate(columns, criteria, ordering)

    def count(self, filters: Filters = None) -> int:
        """Number of products, optionally restricted by equality filters."""
        criteria = _filter_criteria(filters)
        with self.session_manager as session:
            return session.query(func.count(Product.id)).filter(*criteria).scalar()

    def update(self, product_id: int, fields: FieldsLike) -> int:
        """Apply a partial update to one product.

        Returns the number of rows changed: 0 when no fields are supplied or
        the id does not exist, 1 otherwise.

        Raises:
            ValidationError: If a supplied value is invalid
        """
        values = as_fields(fields).validated_for_update()
        product_id = _coerce_id(product_id)
        if not values:
            return 0

        rows_updated = self._update_where([Product.id == product_id], values)
        if rows_updated:
            self.logger.info(f"Updated product {product_id}: {', '.join(sorted(values))}")
            self.notifier.notify(product_id)
        return rows_updated

    def delete(self, product_id: int) -> int:
        """Delete one product; returns 1 if it existed, 0 otherwise."""
        product_id = _coerce_id(product_id)
        rows_deleted = self._delete_where([Product.id == product_id])
        if rows_deleted:
            self.logger.info(f"Deleted product {product_id}")
            self.notifier.notify(product_id)
        return rows_deleted

    def delete_all(self) -> int:
        """Delete every product; returns the number removed."""
        rows_deleted = self._delete_where([])
        if rows_deleted:
            self.logger.info(f"{rows_deleted} rows deleted from products database")
            self.notifier.notify()
        return rows_deleted

    def sell(self, product_id: int) -> int:
        """Take one unit out of stock.

        Returns 1 when the quantity was decremented, 0 when the product is
        missing or already out of stock.
        """
        product_id = _coerce_id(product_id)
        with self.session_manager as session:
            rows = (
                session.query(Product)
                .filter(Product.id == product_id, Product.quantity > 0)
                .update({Product.quantity: Product.quantity - 1}, synchronize_session=False)
            )
        if rows:
            self.logger.debug(f"Sold one unit of product {product_id}")
            self.notifier.notify(product_id)
        return rows

    def restock(self, product_id: int, amount: int = 1) -> int:
        """Adjust quantity by ``amount`` (negative to remove stock).

        Returns 1 on change, 0 if the product does not exist.

        Raises:
            ValidationError: If the amount is not an integer or the result would be negative
        """
        product_id = _coerce_id(product_id)
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise ValidationError('amount', 'must be an integer')
        check_range('amount', amount)
        if amount == 0:
            return 0

        with self.session_manager as session:
            product = session.get(Product, product_id)
            if product is None:
                return 0
            new_quantity = product.quantity + amount
            if new_quantity < 0:
                raise ValidationError('quantity', 'must not be negative')
            check_range('quantity', new_quantity)
            product.quantity = new_quantity

        self.logger.debug(f"Quantity of product {product_id} now {new_quantity}")
        self.notifier.notify(product_id)
        return 1

    def insert_dummy(self) -> int:
        """Create the sample product used to try out an empty inventory."""
        return self.create(DUMMY_PRODUCT)

    # Path-addressed operations

    def query(
        self,
        path: str,
        projection: Projection = None,
        filters: Filters = None,
        sort_order: SortOrder = None
    ) -> Iterator[ProductRecord]:
        """Read the collection or a single item by resource path.

        Raises:
            UnknownResource: If the path addresses neither endpoint
        """
        resource = match(path)
        if resource.endpoint is Endpoint.PRODUCT_ID:
            filters = dict(filters or {})
            filters['id'] = resource.product_id
        return self.list(sort_order=sort_order, projection=projection, filters=filters)

    def insert(self, path: str, fields: FieldsLike) -> str:
        """Create a product through the collection endpoint; returns its item path.

        Raises:
            UnknownResource: If the path is not the collection endpoint
        """
        resource = match(path)
        if resource.endpoint is not Endpoint.PRODUCTS:
            raise UnknownResource(path, 'insertion')
        return item_path(self.create(fields))

    def update_at(self, path: str, fields: FieldsLike, filters: Filters = None) -> int:
        """Update one item, or every product matching ``filters`` on the collection."""
        resource = match(path)
        if resource.endpoint is Endpoint.PRODUCT_ID:
            if filters:
                raise UnknownResource(path, 'filtered update')
            return self.update(resource.product_id, fields)

        values = as_fields(fields).validated_for_update()
        if not values:
            return 0
        rows_updated = self._update_where(_filter_criteria(filters), values)
        if rows_updated:
            self.logger.info(f"Updated {rows_updated} products: {', '.join(sorted(values))}")
            self.notifier.notify()
        return rows_updated

    def delete_at(self, path: str, filters: Filters = None) -> int:
        """Delete one item, or every product matching ``filters`` on the collection."""
        resource = match(path)
        if resource.endpoint is Endpoint.PRODUCT_ID:
            if filters:
                raise UnknownResource(path, 'filtered deletion')
            return self.delete(resource.product_id)
        if not filters:
            return self.delete_all()

        rows_deleted = self._delete_where(_filter_criteria(filters))
        if rows_deleted:
            self.logger.info(f"{rows_deleted} rows deleted from products database")
            self.notifier.notify()
        return rows_deleted

    def get_type(self, path: str) -> str:
        """Content type of the collection or item endpoint."""
        return content_type(path)

    # Internals

    def _iterate(self, columns, criteria, ordering) -> Iterator[ProductRecord]:
        # Rows are read on first iteration and the session released before
        # yielding, so consumers can mutate the store while iterating.
        session = self.session_manager.get_session()
        try:
            rows = session.query(*columns).filter(*criteria).order_by(*ordering).all()
        except SQLAlchemyError as e:
            raise StorageFailure('query', e) from e
        finally:
            session.close()

        for row in rows:
            yield ProductRecord.from_row(row)

    def _update_where(self, criteria: List[Any], values: Mapping[str, Any]) -> int:
        with self.session_manager as session:
            return (
                session.query(Product)
                .filter(*criteria)
                .update(values, synchronize_session=False)
            )

    def _delete_where(self, criteria: List[Any]) -> int:
        with self.session_manager as session:
            return session.query(Product).filter(*criteria).delete(synchronize_session=False)


def _coerce_id(product_id: Any) -> int:
    if isinstance(product_id, bool):
        raise ValidationError('id', 'must be an integer')
    try:
        product_id = int(product_id)
    except (TypeError, ValueError):
        raise ValidationError('id', 'must be an integer') from None
    return check_range('id', product_id)


def _attribute(name: str) -> str:
    try:
        return resolve_attribute(name)
    except KeyError:
        raise ValidationError(name, 'is not a product field') from None


def _projection_columns(projection: Projection) -> List[Any]:
    if projection is None:
        attrs = list(COLUMNS)
    else:
        if isinstance(projection, str):
            projection = [projection]
        requested = {_attribute(name) for name in projection}
        # id always comes back so records stay addressable
        attrs = [attr for attr in COLUMNS if attr == 'id' or attr in requested]
    return [getattr(Product, attr).label(attr) for attr in attrs]


def _filter_criteria(filters: Filters) -> List[Any]:
    if not filters:
        return []
    criteria = []
    for name, value in filters.items():
        attr = _attribute(name)
        if attr == 'id':
            value = _coerce_id(value)
        elif isinstance(value, int) and not isinstance(value, bool):
            value = check_range(attr, value)
        criteria.append(getattr(Product, attr) == value)
    return criteria


def _order_by(sort_order: SortOrder) -> List[Any]:
    if not sort_order:
        return []
    if isinstance(sort_order, str):
        terms = [term for term in sort_order.split(',') if term.strip()]
    else:
        terms = list(sort_order)

    ordering = []
    for term in terms:
        parts = term.split()
        if not parts or len(parts) > 2:
            raise ValidationError('sort_order', f"cannot parse '{term}'")
        column = getattr(Product, _attribute(parts[0]))
        direction = parts[1].upper() if len(parts) == 2 else 'ASC'
        if direction == 'ASC':
            ordering.append(column.asc())
        elif direction == 'DESC':
            ordering.append(column.desc())
        else:
            raise ValidationError('sort_order', f"unknown direction '{parts[1]}'")
    return ordering
