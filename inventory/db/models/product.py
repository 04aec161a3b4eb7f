"""Product model definition."""

from sqlalchemy import Column, Integer, Text

from ...contract import (
    TABLE_NAME,
    COLUMN_ID,
    COLUMN_PRODUCT_NAME,
    COLUMN_PRICE,
    COLUMN_QUANTITY,
    COLUMN_SUPPLIER_NAME,
    COLUMN_SUPPLIER_PHONE_NUMBER,
)
from .base import Base

class Product(Base):
    """Product model.

    Column names follow the on-disk layout of the original inventory.db, so
    existing data files open unchanged.
    """
    
    __tablename__ = TABLE_NAME
    # AUTOINCREMENT keeps ids of deleted rows from being handed out again
    __table_args__ = {'sqlite_autoincrement': True}
    
    id = Column(COLUMN_ID, Integer, primary_key=True, autoincrement=True)
    name = Column(COLUMN_PRODUCT_NAME, Text, nullable=False)
    price = Column(COLUMN_PRICE, Integer, nullable=False, default=0, server_default='0')
    quantity = Column(COLUMN_QUANTITY, Integer, nullable=False, default=0, server_default='0')
    supplier_name = Column(COLUMN_SUPPLIER_NAME, Text, nullable=False)
    supplier_phone = Column(COLUMN_SUPPLIER_PHONE_NUMBER, Text, nullable=False)
    
    def __repr__(self):
        """Return string representation."""
        return f'<Product(id={self.id}, name="{self.name}", quantity={self.quantity})>'
