"""
Utility commands for the inventory CLI.
"""

import click

from ...cli.base import BaseCommand, command_error_handler
from ...cli.config import Config

class TestConnectionCommand(BaseCommand):
    """Command to test database connectivity."""

    def __init__(self, config: Config):
        super().__init__(config)

    @command_error_handler
    def execute(self) -> None:
        """Execute the connection test."""
        self.logger.info("Testing database connection...")
        self.store.session_manager.ping()
        click.secho("Successfully connected to the database!", fg='green')

__all__ = ['TestConnectionCommand']
