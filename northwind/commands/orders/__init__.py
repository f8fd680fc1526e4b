"""
Order commands for the northwind CLI.
Lists orders and exports them to CSV.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

import click
import pandas as pd

from ...cli.base import BaseCommand, command_error_handler
from ...cli.config import Config
from ...reports import order_summary_frame

class ListOrdersCommand(BaseCommand):
    """Command to list orders.

    At most one filter applies: search, overdue, pending or recent. Without
    a filter, every order is listed.
    """

    def __init__(
        self,
        config: Config,
        pending: bool = False,
        overdue: bool = False,
        recent: bool = False,
        search: Optional[str] = None,
        days: Optional[int] = None
    ):
        super().__init__(config)
        self.pending = pending
        self.overdue = overdue
        self.recent = recent
        self.search = search
        self.days = config.recent_days if days is None else days

    def validate(self) -> bool:
        if not super().validate():
            return False
        if sum([self.pending, self.overdue, self.recent, bool(self.search)]) > 1:
            self.logger.error("Use only one of --pending, --overdue, --recent and --search")
            return False
        return True

    def fetch(self, now: datetime):
        orders = self.repositories.orders
        if self.search:
            return orders.search(self.search)
        if self.overdue:
            return orders.get_overdue_orders(now)
        if self.pending:
            return orders.get_pending_orders()
        if self.recent:
            return orders.get_recent_orders(self.days, now=now)
        return orders.get_all(orders.WITH_PARTIES)

    @command_error_handler
    def execute(self) -> None:
        now = datetime.now()
        orders = self.fetch(now)
        # Totals need the order lines, which only search and overdue load
        with_totals = bool(self.search) or self.overdue
        self.emit(order_summary_frame(orders, now, with_totals=with_totals), self.render)

    def render(self, frame: pd.DataFrame) -> None:
        if frame.empty:
            click.echo("No orders found")
            return
        for row in frame.itertuples():
            date = row.order_date.strftime('%Y-%m-%d') if pd.notna(row.order_date) else '-'
            line = f"  #{row.order_id} {date} {row.customer or '-'} via {row.shipper or '-'}"
            if row.overdue:
                click.secho(f"{line} (overdue)", fg='red')
            elif row.pending:
                click.secho(f"{line} (pending)", fg='yellow')
            else:
                click.echo(line)

class ExportOrdersCommand(BaseCommand):
    """Command to export every order with totals to a CSV file."""

    def __init__(self, config: Config, output_file: Path):
        super().__init__(config)
        self.output_file = output_file

    @command_error_handler
    def execute(self) -> None:
        orders = self.repositories.orders.get_orders_with_details()
        frame = order_summary_frame(orders)
        frame.to_csv(self.output_file, index=False)
        self.logger.info(f"Exported {len(frame)} orders to {self.output_file}")
        click.secho(f"Exported {len(frame)} orders to {self.output_file}", fg='green')

__all__ = ['ListOrdersCommand', 'ExportOrdersCommand']
