"""
Base command infrastructure for the inventory CLI.
Provides the shared store, output helpers and error handling for all commands.
"""

import functools
import json
import click
import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from .config import Config
from ..db.session import SessionManager
from ..errors import InventoryError
from ..notifications import ChangeEvent, Subscription
from ..store import InventoryStore

class BaseCommand(ABC):
    """Base class for all CLI commands."""

    def __init__(self, config: Config):
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)
        self._store: Optional[InventoryStore] = None
        self._subscription: Optional[Subscription] = None

        # Get debug status from click context
        ctx = click.get_current_context(silent=True)
        self.debug = bool(ctx and ctx.obj and ctx.obj.get('debug'))
        if self.debug:
            self.logger.debug(f"Debug mode enabled for {self.__class__.__name__}")

    @property
    def store(self) -> InventoryStore:
        """Get or open the inventory store."""
        if self._store is None:
            if self.debug:
                self.logger.debug(f"Opening store on {self.config.database_url}")
            session_manager = SessionManager(self.config.database_url, echo=self.config.echo_sql)
            self._store = InventoryStore(session_manager)
            self._subscription = self._store.subscribe(self._on_change)
        return self._store

    def _on_change(self, event: ChangeEvent) -> None:
        self.logger.debug(f"Inventory changed at {event.path}")

    def close(self) -> None:
        """Drop the change subscription and release database connections."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        if self._store is not None:
            self._store.session_manager.dispose()
            self._store = None

    @property
    def json_output(self) -> bool:
        return self.config.output_format == 'json'

    def emit(self, payload: Any, text: Optional[str] = None) -> None:
        """Print ``payload`` as JSON, or ``text`` in text mode."""
        if self.json_output:
            click.echo(json.dumps(payload, indent=2, default=str))
        elif text is not None:
            click.echo(text)

    @abstractmethod
    def execute(self) -> Optional[int]:
        """Execute the command. Must be implemented by subclasses."""
        pass

class FileInputCommand(BaseCommand):
    """Base class for commands that read an input file."""

    def __init__(self, config: Config, input_file: Path, output_file: Optional[Path] = None):
        super().__init__(config)
        self.input_file = input_file
        self.output_file = output_file

    def validate(self) -> bool:
        """Validate input file exists and is readable."""
        if not self.input_file.exists():
            self.logger.error(f"Input file not found: {self.input_file}")
            return False

        if not self.input_file.is_file():
            self.logger.error(f"Input path is not a file: {self.input_file}")
            return False

        return True

    def save_results(self, results: Dict[str, Any]) -> None:
        """Write results to the output file as JSON."""
        with open(self.output_file, 'w') as f:
            json.dump(results, f, indent=2, default=str)

def command_error_handler(f):
    """Decorator to report command failures consistently and always release the store."""
    @functools.wraps(f)
    def wrapper(self, *args, **kwargs):
        start = time.time()
        if self.debug:
            self.logger.debug(f"Starting command execution: {f.__name__}")
        try:
            result = f(self, *args, **kwargs)
        except InventoryError as e:
            click.secho(f"Error: {e}", fg='red', err=True)
            raise click.Abort()
        except (click.ClickException, click.Abort):
            raise
        except Exception as e:
            self.logger.debug(f"Command failed with error: {e}", exc_info=True)
            click.secho(f"Error: {e}", fg='red', err=True)
            raise click.Abort()
        finally:
            self.close()

        if self.debug:
            self.logger.debug(f"Command completed in {time.time() - start:.3f}s")
        return result
    return wrapper
