"""
Catalog listing commands for the northwind CLI.
Lists customers, their countries and products.
"""

from typing import Optional

import click
import pandas as pd

from ...cli.base import BaseCommand, command_error_handler
from ...cli.config import Config
from ...reports import product_stock_frame

class ListCustomersCommand(BaseCommand):
    """Command to list customers with optional filters."""

    def __init__(self, config: Config, country: Optional[str] = None, search: Optional[str] = None, with_orders: bool = False):
        super().__init__(config)
        self.country = country
        self.search = search
        self.with_orders = with_orders

    @command_error_handler
    def execute(self) -> None:
        customers = self.repositories.customers.search(
            self.search or '',
            country=self.country,
            with_orders_only=self.with_orders
        )
        frame = pd.DataFrame(
            [{
                'customer_id': customer.id,
                'company_name': customer.company_name,
                'contact_name': customer.contact_name,
                'city': customer.city,
                'country': customer.country,
                'orders': len(customer.orders),
            } for customer in customers],
            columns=['customer_id', 'company_name', 'contact_name', 'city', 'country', 'orders']
        )
        self.emit(frame, self.render)

    def render(self, frame: pd.DataFrame) -> None:
        if frame.empty:
            click.echo("No customers found")
            return
        click.echo(f"\n{len(frame)} customers:")
        for row in frame.itertuples():
            click.echo(f"  - {row.company_name} ({row.city}, {row.country}) orders: {row.orders}")

class ListCountriesCommand(BaseCommand):
    """Command to list the countries customers are located in."""

    @command_error_handler
    def execute(self) -> None:
        countries = self.repositories.customers.get_distinct_countries()
        self.emit(pd.DataFrame({'country': countries}), self.render)

    def render(self, frame: pd.DataFrame) -> None:
        for country in frame['country']:
            click.echo(country)

class ListProductsCommand(BaseCommand):
    """Command to list products with stock figures."""

    def __init__(self, config: Config, search: Optional[str] = None, low_stock: bool = False, show_discontinued: bool = False):
        super().__init__(config)
        self.search = search
        self.low_stock = low_stock
        self.show_discontinued = show_discontinued

    @command_error_handler
    def execute(self) -> None:
        products = self.repositories.products.search(
            self.search,
            include_discontinued=self.show_discontinued,
            low_stock_only=self.low_stock
        )
        self.emit(product_stock_frame(products), self.render)

    def render(self, frame: pd.DataFrame) -> None:
        if frame.empty:
            click.echo("No products found")
            return
        for row in frame.itertuples():
            line = f"  - {row.name} [{row.category}] stock {row.units_in_stock} @ {row.unit_price}"
            if row.low_stock:
                click.secho(f"{line} (low stock)", fg='yellow')
            elif row.discontinued:
                click.secho(f"{line} (discontinued)", dim=True)
            else:
                click.echo(line)

__all__ = ['ListCustomersCommand', 'ListCountriesCommand', 'ListProductsCommand']
