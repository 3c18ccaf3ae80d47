"""CLI entry point for the Wezo shell."""

import argparse
from typing import Optional

from rich.console import Console
from rich.table import Table

from ..config.settings import settings
from .navigation import ROLES
from .paths import BasePath, configure_base_path, route_key_to_path
from .routes import build_route_table


def list_routes(console: Optional[Console] = None) -> None:
    """Print the route table with its placements and roles."""
    console = console or Console()
    table = Table(title="Wezo routes")
    table.add_column("Key", style="bold")
    table.add_column("Path")
    table.add_column("Label")
    table.add_column("Placement")
    table.add_column("Roles")
    for route in build_route_table():
        placements = [
            name
            for name, shown in (
                ("nav", route.show_in_nav),
                ("header", route.show_in_header),
                ("footer", route.show_in_footer),
            )
            if shown
        ]
        table.add_row(
            route.key,
            route_key_to_path(route.key),
            route.label,
            ", ".join(placements) or "hidden",
            ", ".join(route.roles) or "public",
        )
    console.print(table)


def run_shell(
    *,
    base_path: Optional[str] = None,
    address: Optional[str] = None,
    role: Optional[str] = None,
) -> None:
    """Run the Textual shell."""
    from .session import Session
    from .textual_app import WezoShellApp

    app_settings = settings
    if base_path is not None:
        configure_base_path(base_path)
        shell = settings.shell.model_copy(update={"base_path": base_path})
        app_settings = settings.model_copy(update={"shell": shell})

    session = Session()
    if role:
        session.sign_in(f"demo-{role.lower()}", role)

    WezoShellApp(settings=app_settings, session=session, address=address).run()


def main():
    parser = argparse.ArgumentParser(description="Wezo - villa rental manager shell")
    parser.add_argument("--base-path", help="Deployment prefix, e.g. /app")
    location = parser.add_mutually_exclusive_group()
    location.add_argument("--route", help="Route key to open on startup")
    location.add_argument("--address", help="Full address to open, e.g. /app/properties?page=2")
    parser.add_argument("--role", choices=ROLES, help="Start signed in with a demo role")
    parser.add_argument("--list-routes", action="store_true", help="Print routes and exit")
    args = parser.parse_args()

    if args.list_routes:
        list_routes()
        return

    address = args.address
    if args.route:
        if args.route not in build_route_table():
            parser.error(f"unknown route: {args.route}")
        address = BasePath.from_config(args.base_path).to_absolute(
            route_key_to_path(args.route)
        )

    run_shell(base_path=args.base_path, address=address, role=args.role)


if __name__ == "__main__":
    main()
