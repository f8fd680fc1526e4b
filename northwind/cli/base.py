"""
Base command infrastructure for the northwind CLI.
Provides common functionality and utilities for all commands.
"""

import click
import logging
import time
from abc import ABC, abstractmethod
from functools import wraps
from typing import Callable, Optional

import pandas as pd

from .config import Config
from ..db.session import SessionManager
from ..errors import IntegrityError, NotFoundError, ValidationError
from ..repositories import Repositories

class BaseCommand(ABC):
    """Base class for all CLI commands."""

    def __init__(self, config: Config):
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)
        self._session_manager = None
        self._repositories = None

        # Get debug status from click context
        ctx = click.get_current_context(silent=True)
        self.debug = bool(ctx and ctx.obj and ctx.obj.get('debug'))
        if self.debug:
            self.logger.debug(f"Debug mode enabled for {self.__class__.__name__}")

    @property
    def session_manager(self) -> SessionManager:
        """Get or create the session manager for the configured store."""
        if self._session_manager is None:
            if self.debug:
                self.logger.debug(f"Creating new engine for {self.config.database_url}")
            self._session_manager = SessionManager(self.config.database_url, echo=self.config.echo_sql)
        return self._session_manager

    @property
    def repositories(self) -> Repositories:
        if self._repositories is None:
            self._repositories = Repositories(self.session_manager, debug=self.debug)
        return self._repositories

    @abstractmethod
    def execute(self) -> None:
        """Execute the command. Must be implemented by subclasses."""
        pass

    def validate(self) -> bool:
        """Validate command configuration and requirements.

        Returns:
            bool: True if validation passes, False otherwise
        """
        if self.debug:
            self.logger.debug("Validating command configuration")
        return True

    def close(self) -> None:
        if self._session_manager is not None:
            self._session_manager.dispose()
            self._session_manager = None
            self._repositories = None

    def emit(self, frame: pd.DataFrame, render_text: Optional[Callable[[pd.DataFrame], None]] = None) -> None:
        """Print a result frame in the configured output format."""
        if self.config.output_format == 'json':
            click.echo(frame.to_json(orient='records', date_format='iso', default_handler=str))
        elif self.config.output_format == 'csv':
            click.echo(frame.to_csv(index=False), nl=False)
        elif render_text is not None:
            render_text(frame)
        else:
            click.echo(frame.to_string(index=False))

def command_error_handler(f):
    """Decorator to handle command execution errors consistently.

    Missing records and rejected writes end the command with exit code 1
    and a short message; anything else aborts.
    """
    @wraps(f)
    def wrapper(self, *args, **kwargs):
        start = time.time()
        try:
            if self.debug:
                self.logger.debug(f"Starting command execution: {f.__name__}")

            result = f(self, *args, **kwargs)

            if self.debug:
                self.logger.debug(f"Command completed in {time.time() - start:.3f}s")

            return result

        except NotFoundError as e:
            click.secho(f"Not found: {e}", fg='red', err=True)
            raise click.exceptions.Exit(1)
        except (IntegrityError, ValidationError) as e:
            click.secho(f"Conflict: {e}", fg='yellow', err=True)
            raise click.exceptions.Exit(1)
        except (click.Abort, click.ClickException):
            raise
        except Exception as e:
            if self.debug:
                self.logger.debug(f"Command failed with error: {str(e)}", exc_info=True)
            click.secho(f"Error: {str(e)}", fg='red', err=True)
            raise click.Abort()
        finally:
            self.close()
    return wrapper
