"""
Configuration management for the northwind CLI.
Handles loading and validating configuration from environment variables and files.
"""

import os
from dataclasses import dataclass
from typing import Optional
from pathlib import Path
from dotenv import load_dotenv

OUTPUT_FORMATS = ['text', 'json', 'csv']

@dataclass
class Config:
    """Configuration settings for the northwind CLI."""

    # Database settings
    database_url: str
    echo_sql: bool = False

    # Logging settings
    log_level: str = 'INFO'
    log_dir: Optional[Path] = None

    # Output settings
    output_format: str = 'text'  # text, json, csv

    # Query settings
    recent_days: int = 30

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> 'Config':
        """Create configuration from environment variables.

        Args:
            env_file: Optional path to .env file

        Returns:
            Config: Configuration instance

        Raises:
            ValueError: If required environment variables are missing
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        database_url = os.getenv('DATABASE_URL')
        if not database_url:
            raise ValueError("DATABASE_URL environment variable is required")

        return cls(
            database_url=database_url,
            echo_sql=os.getenv('ECHO_SQL', 'false').lower() == 'true',
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
            log_dir=Path(os.getenv('LOG_DIR')) if os.getenv('LOG_DIR') else None,
            output_format=os.getenv('OUTPUT_FORMAT', 'text').lower(),
            recent_days=int(os.getenv('RECENT_DAYS', '30'))
        )

    def validate(self) -> bool:
        """Validate configuration settings.

        Returns:
            bool: True if configuration is valid
        """
        # Validate log directory exists if specified
        if self.log_dir and not self.log_dir.exists():
            try:
                self.log_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ValueError(f"Failed to create log directory: {e}")

        if self.recent_days <= 0:
            raise ValueError("recent_days must be positive")

        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(f"output_format must be one of: {', '.join(OUTPUT_FORMATS)}")

        return True
