"""Read-only product snapshots handed out by the store."""

import re
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .contract import COLUMNS

# Shortest supplier phone number worth dialing
PHONE_NUM_MINIMUM = 10


@dataclass(frozen=True)
class ProductRecord:
    """Detached copy of one product row.

    Fields left out of a projection are ``None``; ``id`` is always present.
    """
    id: int
    name: Optional[str] = None
    price: Optional[int] = None
    quantity: Optional[int] = None
    supplier_name: Optional[str] = None
    supplier_phone: Optional[str] = None

    @classmethod
    def from_row(cls, row: Any) -> 'ProductRecord':
        """Build from a SQLAlchemy ``Row`` or a ``Product`` instance."""
        if hasattr(row, '_asdict'):
            return cls(**row._asdict())
        return cls(**{attr: getattr(row, attr) for attr in COLUMNS})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_columns(self) -> Dict[str, Any]:
        """Key values by their persisted column names."""
        return {COLUMNS[attr]: value for attr, value in asdict(self).items()}

    @property
    def in_stock(self) -> bool:
        return bool(self.quantity)

    def is_dialable(self) -> bool:
        """Whether the supplier phone has enough digits to place a call."""
        if not self.supplier_phone:
            return False
        return len(re.sub(r'[^\d]', '', self.supplier_phone)) >= PHONE_NUM_MINIMUM
