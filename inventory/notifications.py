"""Change notification for the products collection.

Observers subscribe to the whole collection or to one product id. An event
only says that something changed at a path; observers re-read through the
store to see what.
"""

import itertools
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .contract import COLLECTION_PATH, item_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeEvent:
    """Signal that data under ``path`` changed."""
    path: str
    product_id: Optional[int] = None


Observer = Callable[[ChangeEvent], None]


class Subscription:
    """Handle for one registered observer.

    Usable as a context manager so a view can tie the subscription to its
    own lifetime.
    """

    def __init__(self, notifier: 'ChangeNotifier', token: int, product_id: Optional[int]):
        self._notifier = notifier
        self._token = token
        self.product_id = product_id

    @property
    def active(self) -> bool:
        return self._notifier._has(self._token)

    def unsubscribe(self) -> None:
        self._notifier._remove(self._token)

    def __enter__(self) -> 'Subscription':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.unsubscribe()
        return False


class ChangeNotifier:
    """Registry of observers keyed by collection or product id."""

    def __init__(self):
        self._observers: Dict[int, tuple] = {}
        self._tokens = itertools.count(1)

    def subscribe(self, callback: Observer, product_id: Optional[int] = None) -> Subscription:
        """Register ``callback`` for the collection, or for one product when ``product_id`` is given."""
        token = next(self._tokens)
        self._observers[token] = (callback, product_id)
        logger.debug(f"Observer {token} subscribed to {self._path(product_id)}")
        return Subscription(self, token, product_id)

    def notify(self, product_id: Optional[int] = None) -> int:
        """Deliver a change event.

        Collection observers always receive it; observers of ``product_id``
        receive it too when an id is given. Returns the number of observers
        that handled the event.
        """
        event = ChangeEvent(self._path(product_id), product_id)
        delivered = 0
        # copy, observers may unsubscribe while handling
        for token, (callback, scope) in list(self._observers.items()):
            if scope is not None and scope != product_id:
                continue
            try:
                callback(event)
            except Exception:
                logger.exception(f"Observer {token} failed to handle change at {event.path}")
                continue
            delivered += 1
        return delivered

    def observer_count(self, product_id: Optional[int] = None) -> int:
        return sum(1 for _, scope in self._observers.values() if scope == product_id)

    def _has(self, token: int) -> bool:
        return token in self._observers

    def _remove(self, token: int) -> None:
        if self._observers.pop(token, None) is not None:
            logger.debug(f"Observer {token} unsubscribed")

    @staticmethod
    def _path(product_id: Optional[int]) -> str:
        return COLLECTION_PATH if product_id is None else item_path(product_id)
