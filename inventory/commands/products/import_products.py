"""Product import command for inventory CSV files."""

from pathlib import Path
from typing import Optional

import click

from ...cli.base import FileInputCommand, command_error_handler
from ...cli.config import Config
from ...processors.product_import import ProductImportProcessor

class ImportProductsCommand(FileInputCommand):
    """Import products from a CSV file."""

    def __init__(
        self,
        config: Config,
        input_file: Path,
        output_file: Optional[Path] = None,
        batch_size: Optional[int] = None
    ):
        """Initialize command.

        Args:
            config: Application configuration
            input_file: Path to input CSV file
            output_file: Optional path to save results
            batch_size: Rows per batch (defaults to the configured batch size)
        """
        super().__init__(config, input_file, output_file)
        self.batch_size = batch_size or config.batch_size

    @command_error_handler
    def execute(self) -> int:
        """Execute the command.

        Returns:
            Exit code: 0 when every row was imported, 1 otherwise
        """
        if not self.validate():
            raise click.Abort()

        processor = ProductImportProcessor(
            self.store,
            batch_size=self.batch_size,
            error_limit=self.config.error_limit,
            debug=self.debug
        )

        self.logger.info(f"Importing products from {self.input_file}")
        results = processor.process_file(self.input_file)
        stats = results['summary']['stats']

        self.emit(results['summary'], "\n".join([
            "\nImport complete:",
            f"Rows read: {stats['total_products']}",
            f"Created: {stats['created']}",
            f"Rejected: {stats['rejected']}",
            f"Failed batches: {stats['failed_batches']}",
        ]))

        if self.output_file:
            self.save_results(results)
            self.logger.info(f"Detailed results saved to {self.output_file}")

        if stats['total_errors'] or stats['failed_batches']:
            return 1
        return 0
