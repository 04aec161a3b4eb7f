"""Product import processor for inventory CSV files."""

from pathlib import Path
from typing import Dict, Any, List, Optional, Tuple
import pandas as pd

from ..errors import ValidationError
from ..fields import ProductFields, COUNT_FIELDS
from ..store import InventoryStore
from .base import BaseProcessor
from .error_tracker import ImportErrorLog

REQUIRED_FIELDS = ('name', 'supplier_name', 'supplier_phone')

class ProductImportProcessor(BaseProcessor):
    """Create one product per CSV row through the inventory store.

    Each row is its own insert: a rejected row is reported and skipped
    without affecting the rows around it.
    """

    # Field -> accepted header spellings (compared after normalization)
    field_mappings = {
        'name': ['name', 'product_name', 'title'],
        'price': ['price'],
        'quantity': ['quantity', 'qty'],
        'supplier_name': ['supplier', 'supplier_name', 'suppliername'],
        'supplier_phone': ['phone', 'supplier_phone', 'supplierphone', 'supplier_phone_number'],
    }

    def __init__(
        self,
        store: InventoryStore,
        batch_size: int = 100,
        error_limit: int = 1000,
        debug: bool = False
    ):
        super().__init__(store, batch_size, error_limit, debug)
        self.error_log = ImportErrorLog()
        self.created_ids: List[int] = []

        self.stats.total_products = 0
        self.stats.created = 0
        self.stats.rejected = 0

    @staticmethod
    def _normalize_header(header: str) -> str:
        return '_'.join(str(header).strip().lower().replace('-', ' ').split())

    def map_columns(self, df: pd.DataFrame) -> Dict[str, str]:
        """Map product fields to the DataFrame columns that carry them."""
        headers = {self._normalize_header(col): col for col in df.columns}
        mapping = {}
        for field, spellings in self.field_mappings.items():
            for spelling in spellings:
                if spelling in headers:
                    mapping[field] = headers[spelling]
                    break
        return mapping

    def validate_data(self, df: pd.DataFrame) -> Tuple[List[str], List[str]]:
        """Validate data before processing.

        Returns:
            Tuple of (critical_issues, warnings)
        """
        critical_issues = []
        warnings = []

        mapping = self.map_columns(df)
        missing = [field for field in REQUIRED_FIELDS if field not in mapping]
        if missing:
            critical_issues.append(f"Missing required columns: {', '.join(missing)}")
            return critical_issues, warnings

        name_col = mapping['name']
        empty_names = df[df[name_col].isna() | (df[name_col].astype(str).str.strip() == '')]
        if not empty_names.empty:
            warnings.append(
                f"Found {len(empty_names)} rows without a product name that will be skipped. "
                f"First few row numbers: {', '.join(str(i + 1) for i in empty_names.index[:3])}"
            )

        for field in COUNT_FIELDS:
            if field not in mapping:
                continue
            values = df[mapping[field]].dropna().astype(str).str.strip()
            invalid = values[~values.str.fullmatch(r'\d+')]
            if not invalid.empty:
                warnings.append(
                    f"Found {len(invalid)} rows with a {field} that is not a non-negative whole number"
                )

        return critical_issues, warnings

    def _row_fields(self, row: pd.Series, mapping: Dict[str, str]) -> ProductFields:
        values = {}
        for field, column in mapping.items():
            value = row[column]
            if pd.isna(value):
                # empty price/quantity fall back to defaults, empty text stays missing
                continue
            values[field] = value
        return ProductFields(**values)

    def _process_batch(self, batch_df: pd.DataFrame) -> pd.DataFrame:
        """Create products for a batch of rows.

        Returns:
            The batch with ``product_id`` and ``error`` columns added
        """
        mapping = self.map_columns(batch_df)
        product_ids: List[Optional[int]] = []
        errors: List[Optional[str]] = []

        for idx, row in batch_df.iterrows():
            self.stats.total_products += 1
            row_number = int(idx) + 1
            try:
                product_id = self.store.create(self._row_fields(row, mapping))
            except ValidationError as e:
                self.error_log.record(row_number, e)
                self.stats.rejected += 1
                self.stats.total_errors += 1
                product_ids.append(None)
                errors.append(str(e))
                if self.debug:
                    self.logger.debug(f"Row {row_number} rejected: {e}")
                continue

            self.created_ids.append(product_id)
            self.stats.created += 1
            product_ids.append(product_id)
            errors.append(None)

        batch_df['product_id'] = product_ids
        batch_df['error'] = errors
        return batch_df

    def process_file(self, file_path: Path) -> Dict[str, Any]:
        """Read a CSV file and import every row.

        Returns:
            Results with summary stats, rejected-row details and created ids
        """
        self.logger.info(f"Reading products from {file_path}")
        df = pd.read_csv(file_path, dtype=str, skipinitialspace=True)
        self.process(df)
        self.error_log.log_summary(self.logger)

        return {
            'summary': {
                'stats': self.get_stats(),
                'errors': self.error_log.get_summary()
            },
            'created_ids': list(self.created_ids)
        }
