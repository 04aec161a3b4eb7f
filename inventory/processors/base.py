"""Base processor for batch work against the inventory store."""
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, Any, List, Tuple
import logging
import time
import pandas as pd

from ..store import InventoryStore

class ProcessingStats:
    """Counters for a processing run, readable as attributes or keys."""

    def __init__(self, **counters: int):
        self._stats: Dict[str, Any] = {
            'total_processed': 0,
            'successful_batches': 0,
            'failed_batches': 0,
            'total_errors': 0,
            'processing_time': 0.0,
            'started_at': datetime.now(timezone.utc),
            'completed_at': None
        }
        self._stats.update(counters)

    def __getitem__(self, key: str) -> Any:
        return self._stats[key]

    def __getattr__(self, name: str) -> Any:
        try:
            return self.__dict__['_stats'][name]
        except KeyError:
            raise AttributeError(name) from None

    def __setattr__(self, name: str, value: Any) -> None:
        if name == '_stats':
            super().__setattr__(name, value)
        else:
            self._stats[name] = value

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to a JSON-friendly dictionary."""
        result = {}
        for key, value in self._stats.items():
            if isinstance(value, datetime):
                result[key] = value.isoformat()
            elif isinstance(value, float):
                result[key] = round(value, 3)
            else:
                result[key] = value
        return result

class BaseProcessor(ABC):
    """Abstract base class for DataFrame processors writing through the store."""

    def __init__(
        self,
        store: InventoryStore,
        batch_size: int = 100,
        error_limit: int = 1000,
        debug: bool = False
    ):
        """Initialize processor with the store and batching configuration.

        Args:
            store: Inventory store records are written to
            batch_size: Number of rows to process in each batch
            error_limit: Maximum number of errors before stopping
            debug: Enable debug logging
        """
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self.store = store
        self.batch_size = batch_size
        self.error_limit = error_limit
        self.debug = debug
        self.logger = logging.getLogger(self.__class__.__name__)
        self.stats = ProcessingStats()

        if self.debug:
            self.logger.debug(f"Initialized {self.__class__.__name__} with batch_size={batch_size}")

    @abstractmethod
    def validate_data(self, df: pd.DataFrame) -> Tuple[List[str], List[str]]:
        """Validate data before processing.

        Returns:
            Tuple of (critical_issues, warnings)
        """
        pass

    @abstractmethod
    def _process_batch(self, batch_df: pd.DataFrame) -> pd.DataFrame:
        """Process a single batch of rows and return it annotated with results."""
        pass

    def process(self, data: pd.DataFrame) -> pd.DataFrame:
        """Validate, then process the data in batches.

        Critical validation issues stop the run before anything is written;
        warnings are logged and processing continues.

        Args:
            data: DataFrame to process

        Returns:
            Processed DataFrame (empty if validation failed)
        """
        start_time = time.time()
        critical_issues, warnings = self.validate_data(data)

        if warnings:
            self.logger.warning("Validation warnings:")
            for warning in warnings:
                self.logger.warning(f"  - {warning}")

        if critical_issues:
            self.logger.error("Data validation failed:")
            for issue in critical_issues:
                self.logger.error(f"  - {issue}")
            self.stats.total_errors += len(critical_issues)
            self.stats.completed_at = datetime.now(timezone.utc)
            return pd.DataFrame()

        total_rows = len(data)
        total_batches = (total_rows + self.batch_size - 1) // self.batch_size
        result_dfs = []

        if self.debug:
            self.logger.debug(f"Processing {total_rows} rows in {total_batches} batches")

        for batch_num, start_idx in enumerate(range(0, total_rows, self.batch_size), 1):
            batch_df = data.iloc[start_idx:start_idx + self.batch_size].copy()

            try:
                result_dfs.append(self._process_batch(batch_df))
                self.stats.successful_batches += 1
            except Exception as e:
                self.logger.error(f"Error in batch {batch_num} starting at row {start_idx}: {e}")
                self.stats.failed_batches += 1
                self.stats.total_errors += 1
                continue
            finally:
                self.stats.total_processed += len(batch_df)

            if self.debug:
                self.logger.debug(f"Batch {batch_num}/{total_batches} done")

            if self.stats.total_errors >= self.error_limit:
                self.logger.error(f"Stopping: Error limit ({self.error_limit}) reached")
                break

        self.stats.processing_time = time.time() - start_time
        self.stats.completed_at = datetime.now(timezone.utc)

        return pd.concat(result_dfs, ignore_index=True) if result_dfs else pd.DataFrame()

    def get_stats(self) -> Dict[str, Any]:
        """Get processing statistics."""
        return self.stats.to_dict()
