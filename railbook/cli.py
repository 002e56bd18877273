"""
Console front end for railbook.

    railbook login alice
    railbook trains --source Chennai --destination Mumbai
    railbook book <train-id> --name Asha --age 29 --gender F --phone 9999999999
    railbook cancel PNR000123
    railbook pnr pnr000123
    railbook admin overview
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from railbook.core.config import get_settings
from railbook.core.exceptions import RailbookError, RedirectRequired, ValidationError
from railbook.core.logging import setup_logging
from railbook.core.notifications import Notification, Notifier
from railbook.main import Application
from railbook.schemas.booking import Booking, BookingStatus
from railbook.schemas.forms import PassengerForm, RegistrationForm, TrainForm
from railbook.schemas.train import Train
from railbook.views.routes import ADMIN_ROUTE, PASSENGER_ROUTE

console = Console()

LEVEL_STYLES = {
    "success": "bold green",
    "info": "cyan",
    "error": "bold red",
}


class RichNotifier(Notifier):
    def __init__(self, target: Console = console):
        self.console = target

    def notify(self, notification: Notification) -> None:
        style = LEVEL_STYLES.get(notification.level, "")
        self.console.print(f"[{style}]{notification.message}[/{style}]" if style else notification.message)


def ask_confirm(message: str) -> bool:
    return Confirm.ask(message, console=console, default=False)


# Rendering

def render_trains(trains: List[Train]) -> None:
    if not trains:
        console.print("[dim]No trains to show[/dim]")
        return
    table = Table(title="Trains", box=box.SIMPLE_HEAVY)
    for column in ("ID", "Train #", "Name", "Route", "Seats", "Fare", "Departure", "Arrival"):
        table.add_column(column)
    for t in trains:
        seat_style = "red" if t.sold_out else "green"
        table.add_row(
            t.id,
            t.train_number,
            t.train_name,
            f"{t.source} -> {t.destination}",
            f"[{seat_style}]{t.available_seats}/{t.total_seats}[/{seat_style}]",
            f"₹{t.fare:g}",
            t.departure_time or "N/A",
            t.arrival_time or "N/A",
        )
    console.print(table)


def render_bookings(bookings: List[Booking], title: str = "Bookings", show_user: bool = False) -> None:
    if not bookings:
        console.print("[dim]No bookings yet[/dim]")
        return
    table = Table(title=title, box=box.SIMPLE_HEAVY)
    columns = ["PNR"] + (["User"] if show_user else []) + ["Train", "Passenger", "Seat", "Status", "Date"]
    for column in columns:
        table.add_column(column)
    for b in bookings:
        if b.booking_status == BookingStatus.WAITING:
            seat = f"WL {b.position}" if b.position is not None else "WL"
        else:
            seat = str(b.seat_number) if b.seat_number is not None else "-"
        status_style = "green" if b.booking_status == BookingStatus.CONFIRMED else "red"
        row = [b.pnr] + ([b.username] if show_user else []) + [
            f"{b.train_name} ({b.train_number})",
            b.passenger_name,
            seat,
            f"[{status_style}]{b.booking_status.value}[/{status_style}]",
            b.booking_date.strftime("%Y-%m-%d"),
        ]
        table.add_row(*row)
    console.print(table)


def render_pnr(booking: Booking) -> None:
    lines = [
        f"[bold]{booking.pnr}[/bold]  {booking.booking_status.value}",
        f"{booking.train_name} ({booking.train_number})  {booking.source} -> {booking.destination}",
        f"Passenger: {booking.passenger_name}, {booking.passenger_age}, {booking.passenger_gender}",
    ]
    if booking.booking_status == BookingStatus.WAITING:
        lines.append(f"Waiting list position: {booking.position}")
    elif booking.seat_number is not None:
        lines.append(f"Seat: {booking.seat_number}")
    lines.append(f"Fare: ₹{booking.fare:g}  Booked: {booking.booking_date:%Y-%m-%d}")
    console.print(Panel("\n".join(lines), title="PNR Status", box=box.ROUNDED))


# Commands

async def cmd_login(args: argparse.Namespace, app: Application) -> int:
    password = args.password or Prompt.ask("Password", password=True, console=console)
    route = await app.auth.login(args.username, password)
    if route is None:
        return 1
    console.print(f"[dim]Signed in; dashboard {route}[/dim]")
    return 0


async def cmd_register(args: argparse.Namespace, app: Application) -> int:
    password = args.password or Prompt.ask("Password", password=True, console=console)
    confirm_password = args.confirm_password or Prompt.ask("Confirm password", password=True, console=console)
    form = RegistrationForm(
        username=args.username,
        password=password,
        confirm_password=confirm_password,
        full_name=args.full_name,
        email=args.email,
        phone=args.phone,
    )
    return 0 if await app.auth.register(form) else 1


async def cmd_logout(args: argparse.Namespace, app: Application) -> int:
    app.guard.logout()
    return 0


async def cmd_whoami(args: argparse.Namespace, app: Application) -> int:
    identity = app.guard.identity
    if identity is None:
        console.print("Not signed in")
        return 1
    console.print(f"{identity.full_name} ({identity.username}) - {identity.role.value}")
    return 0


async def cmd_trains(args: argparse.Namespace, app: Application) -> int:
    dashboard = await app.navigate(PASSENGER_ROUTE)
    if args.source or args.destination:
        if await dashboard.search(args.source or "", args.destination or "") is None:
            return 1
    render_trains(dashboard.catalog.trains)
    return 0


async def cmd_book(args: argparse.Namespace, app: Application) -> int:
    dashboard = await app.navigate(PASSENGER_ROUTE)
    train = dashboard.catalog.find(args.train_id)
    if train is None:
        app.notifier.error(f"Train {args.train_id} not found")
        return 1

    form = PassengerForm(
        passenger_name=args.name,
        passenger_age=args.age,
        passenger_gender=args.gender,
        passenger_phone=args.phone,
    )
    try:
        attempt = await dashboard.book(train, form)
    except ValidationError:
        return 1
    if attempt is None:
        return 0
    render_bookings(dashboard.ledger.bookings, title="My Bookings")
    return 0 if attempt.result is not None else 1


async def cmd_bookings(args: argparse.Namespace, app: Application) -> int:
    dashboard = await app.navigate(PASSENGER_ROUTE)
    render_bookings(dashboard.ledger.bookings, title="My Bookings")
    cancellable = dashboard.ledger.cancellable()
    if cancellable:
        pnrs = ", ".join(b.pnr for b in cancellable)
        console.print(f"[dim]Cancellable: {pnrs} (railbook cancel <PNR>)[/dim]")
    return 0


async def cmd_cancel(args: argparse.Namespace, app: Application) -> int:
    dashboard = await app.navigate(PASSENGER_ROUTE)
    booking = dashboard.ledger.find(args.pnr.strip().upper())
    if booking is None:
        app.notifier.error(f"No booking {args.pnr} in your bookings")
        return 1
    if not dashboard.ledger.can_cancel(booking):
        app.notifier.error(f"Booking {booking.pnr} is {booking.booking_status.value} and cannot be cancelled")
        return 1
    return 0 if await dashboard.cancel(booking) else 1


async def cmd_pnr(args: argparse.Namespace, app: Application) -> int:
    booking = await app.pnr.lookup(args.pnr)
    if booking is None:
        return 1
    render_pnr(booking)
    return 0


async def cmd_admin(args: argparse.Namespace, app: Application) -> int:
    dashboard = await app.navigate(ADMIN_ROUTE)
    admin = dashboard.console

    if args.admin_command == "overview":
        summary = admin.summary
        if summary is None:
            return 1
        stats = admin.seat_statistics()
        console.print(Panel(
            f"Trains: {summary.total_trains}   Bookings: {summary.total_bookings}   "
            f"Passengers: {summary.total_passengers}   Waiting list: {summary.waiting_count}\n"
            f"Seats: {stats.total_seats} total, {stats.booked_seats} booked ({stats.booked_percent}%), "
            f"{stats.available_seats} available ({stats.available_percent}%)",
            title="Overview",
            box=box.DOUBLE_EDGE,
        ))
        render_bookings(admin.recent_bookings(), title="Recent Bookings")
    elif args.admin_command == "trains":
        render_trains(admin.trains)
    elif args.admin_command == "bookings":
        render_bookings(admin.bookings, title="All Bookings", show_user=True)
    elif args.admin_command == "add-train":
        form = TrainForm(
            train_number=args.train_number,
            train_name=args.train_name,
            source=args.source,
            destination=args.destination,
            total_seats=args.total_seats,
            fare=args.fare,
            departure_time=args.departure_time or "",
            arrival_time=args.arrival_time or "",
        )
        return 0 if await dashboard.add_train(form) else 1
    elif args.admin_command == "delete-train":
        return 0 if await dashboard.delete_train(args.train_id) else 1
    return 0


COMMANDS = {
    "login": cmd_login,
    "register": cmd_register,
    "logout": cmd_logout,
    "whoami": cmd_whoami,
    "trains": cmd_trains,
    "book": cmd_book,
    "bookings": cmd_bookings,
    "cancel": cmd_cancel,
    "pnr": cmd_pnr,
    "admin": cmd_admin,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="railbook", description="Railway ticket reservation console")
    parser.add_argument("--api", default=None, help="Railway API base URL (overrides API_BASE_URL)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log API traffic to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    p_login = sub.add_parser("login", help="Sign in")
    p_login.add_argument("username")
    p_login.add_argument("--password", default=None)

    p_register = sub.add_parser("register", help="Create a passenger account")
    p_register.add_argument("username")
    p_register.add_argument("--full-name", required=True)
    p_register.add_argument("--email", required=True)
    p_register.add_argument("--phone", default="")
    p_register.add_argument("--password", default=None)
    p_register.add_argument("--confirm-password", default=None)

    sub.add_parser("logout", help="Sign out")
    sub.add_parser("whoami", help="Show the signed-in identity")

    p_trains = sub.add_parser("trains", help="List or search trains")
    p_trains.add_argument("--source", default=None)
    p_trains.add_argument("--destination", default=None)

    p_book = sub.add_parser("book", help="Book a ticket (joins the waiting list when sold out)")
    p_book.add_argument("train_id")
    p_book.add_argument("--name", required=True)
    p_book.add_argument("--age", required=True)
    p_book.add_argument("--gender", default="M", choices=["M", "F", "Other"])
    p_book.add_argument("--phone", required=True)

    sub.add_parser("bookings", help="List my bookings")

    p_cancel = sub.add_parser("cancel", help="Cancel a confirmed booking")
    p_cancel.add_argument("pnr")

    p_pnr = sub.add_parser("pnr", help="Check booking status by PNR")
    p_pnr.add_argument("pnr")

    p_admin = sub.add_parser("admin", help="Inventory console")
    admin_sub = p_admin.add_subparsers(dest="admin_command", required=True)
    admin_sub.add_parser("overview", help="Summary statistics")
    admin_sub.add_parser("trains", help="All trains")
    admin_sub.add_parser("bookings", help="All bookings")
    p_add = admin_sub.add_parser("add-train", help="Create a train")
    p_add.add_argument("--train-number", required=True)
    p_add.add_argument("--train-name", required=True)
    p_add.add_argument("--source", required=True)
    p_add.add_argument("--destination", required=True)
    p_add.add_argument("--total-seats", required=True)
    p_add.add_argument("--fare", required=True)
    p_add.add_argument("--departure-time", default=None)
    p_add.add_argument("--arrival-time", default=None)
    p_delete = admin_sub.add_parser("delete-train", help="Delete a train")
    p_delete.add_argument("train_id")

    return parser


async def run(args: argparse.Namespace) -> int:
    settings = get_settings()
    if args.api:
        settings = settings.model_copy(update={"API_BASE_URL": args.api})

    async with Application(settings=settings, notifier=RichNotifier(), confirm=ask_confirm) as app:
        try:
            return await COMMANDS[args.command](args, app)
        except RedirectRequired as e:
            if e.reason == "role_mismatch":
                console.print("[yellow]This command is not available for your account.[/yellow]")
            else:
                console.print("[yellow]Please sign in: railbook login <username>[/yellow]")
            return 2
        except RailbookError as e:
            console.print(f"[bold red]{e}[/bold red]")
            return 1


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else None)
    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        console.print("Exiting...")
        return 130


if __name__ == "__main__":
    sys.exit(main())
