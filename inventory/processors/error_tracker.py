"""Aggregation of rejected rows during imports."""

from collections import defaultdict
from typing import Any, Dict, List
import logging

from ..errors import ValidationError

class ImportErrorLog:
    """Group rejected rows by the field that failed validation."""

    def __init__(self, max_samples: int = 3):
        """Initialize the log.

        Args:
            max_samples: Maximum number of sample rows kept per field
        """
        self.counts: Dict[str, int] = defaultdict(int)
        self.samples: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        self.max_samples = max_samples

    def record(self, row_number: int, error: ValidationError) -> None:
        """Record a row rejected with ``error``."""
        self.counts[error.field] += 1
        if len(self.samples[error.field]) < self.max_samples:
            self.samples[error.field].append({
                'row': row_number,
                'reason': error.reason
            })

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def get_summary(self) -> Dict[str, Any]:
        """Counts and sample rows per field."""
        return {
            'counts': dict(self.counts),
            'samples': dict(self.samples)
        }

    def log_summary(self, logger: logging.Logger) -> None:
        """Write the summary to ``logger`` at warning level."""
        if not self.counts:
            return

        logger.warning("Rejected rows by field:")
        for field, count in sorted(self.counts.items()):
            logger.warning(f"  {field}: {count} rows")
            for sample in self.samples[field]:
                logger.warning(f"    row {sample['row']}: {field} {sample['reason']}")
