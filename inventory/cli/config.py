"""
Configuration management for the inventory CLI.
Handles loading and validating configuration from environment variables and .env files.
"""

import os
from dataclasses import dataclass
from typing import Optional
from pathlib import Path
from dotenv import load_dotenv

DEFAULT_DATABASE_URL = 'sqlite:///inventory.db'
OUTPUT_FORMATS = ('text', 'json')

@dataclass
class Config:
    """Configuration settings for the inventory CLI."""

    # Database settings
    database_url: str = DEFAULT_DATABASE_URL
    echo_sql: bool = False

    # Logging settings
    log_level: str = 'INFO'
    log_dir: Optional[Path] = None

    # Output settings
    output_format: str = 'text'  # text, json

    # Import settings
    batch_size: int = 100
    error_limit: int = 1000

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> 'Config':
        """Create configuration from environment variables.

        Args:
            env_file: Optional path to .env file

        Returns:
            Config: Configuration instance

        Raises:
            ValueError: If a numeric setting cannot be parsed
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        return cls(
            database_url=os.getenv('DATABASE_URL') or DEFAULT_DATABASE_URL,
            echo_sql=os.getenv('ECHO_SQL', 'false').lower() == 'true',
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
            log_dir=Path(os.getenv('LOG_DIR')) if os.getenv('LOG_DIR') else None,
            output_format=os.getenv('OUTPUT_FORMAT', 'text').lower(),
            batch_size=int(os.getenv('BATCH_SIZE', '100')),
            error_limit=int(os.getenv('ERROR_LIMIT', '1000'))
        )

    def validate(self) -> bool:
        """Validate configuration settings.

        Returns:
            bool: True if configuration is valid

        Raises:
            ValueError: If a setting is out of range
        """
        if self.log_dir and not self.log_dir.exists():
            try:
                self.log_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ValueError(f"Failed to create log directory: {e}")

        if self.batch_size <= 0:
            raise ValueError("batch_size must be positive")
        if self.error_limit <= 0:
            raise ValueError("error_limit must be positive")

        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(f"output_format must be one of: {', '.join(OUTPUT_FORMATS)}")

        return True
