"""Command-line client for the rail ticketing API."""

import asyncio
import json
import logging
import sys
from dataclasses import asdict, dataclass, is_dataclass
from typing import Any

import aiohttp

from rail_ticketing.adapters.config import AppConfig
from rail_ticketing.adapters.local_collaborators import FixedLocationProvider, StaticAuthSession
from rail_ticketing.adapters.rest_api import (
    RestConnectionRepository,
    RestHttpClient,
    RestStationRepository,
    RestTicketPurchaseRepository,
    RestTicketRepository,
)
from rail_ticketing.application.services import (
    ConnectionSearchEngine,
    PricingEngine,
    StationCatalog,
    TicketLifecycleManager,
)
from rail_ticketing.domain.codecs import DateNormalizer
from rail_ticketing.domain.errors import ValidationError
from rail_ticketing.domain.models import (
    Coordinates,
    Itinerary,
    SearchQuery,
    TicketDetails,
    TicketScope,
)

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Application services wired to the REST adapters."""

    stations: StationCatalog
    search: ConnectionSearchEngine
    pricing: PricingEngine
    tickets: TicketLifecycleManager


def build_services(config: AppConfig, session: aiohttp.ClientSession) -> Services:
    """Wire repositories and services for one CLI invocation."""
    api = RestHttpClient(
        session,
        config.api_base_url,
        token=config.api_token,
        timeout_seconds=config.request_timeout_seconds,
    )
    search_api = RestHttpClient(
        session,
        config.search_base_url(),
        token=config.api_token,
        timeout_seconds=config.request_timeout_seconds,
    )
    auth_session = StaticAuthSession(config.user_id, config.user_email)
    return Services(
        stations=StationCatalog(
            RestStationRepository(api),
            FixedLocationProvider(config.latitude, config.longitude),
        ),
        search=ConnectionSearchEngine(
            RestConnectionRepository(search_api, config.search_page_timeout_seconds)
        ),
        pricing=PricingEngine(RestTicketPurchaseRepository(api)),
        tickets=TicketLifecycleManager(
            RestTicketRepository(api),
            auth_session=auth_session,
            page_size=config.tickets_page_size,
        ),
    )


def _print_json(data: Any) -> None:
    if isinstance(data, list):
        data = [asdict(item) if is_dataclass(item) else item for item in data]
    elif is_dataclass(data):
        data = asdict(data)
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def _print_itinerary(itinerary: Itinerary) -> None:
    display_time = DateNormalizer.format_display_time
    print(
        f"  {display_time(itinerary.departure_time)} {itinerary.start_station} -> "
        f"{display_time(itinerary.arrival_time)} {itinerary.end_station} "
        f"({itinerary.total_duration}, {itinerary.transfers_count} transfer(s))"
    )
    for line in itinerary.legs_summary():
        print(f"      {line}")
    prices = [leg.price for leg in itinerary.legs if leg.price is not None]
    if prices:
        print(f"      from {', '.join(str(p) for p in prices)}")


def _print_ticket(ticket: TicketDetails, services: Services, scope: TicketScope) -> None:
    display_date = DateNormalizer.format_display_date
    print(f"\nTicket #{ticket.ticket_number} ({ticket.status.value})")
    print(f"  ID: {ticket.id}")
    print(f"  Train: {ticket.operator_name} {ticket.train_name}")
    print(f"  Date: {display_date(ticket.connection_date)}")
    print(f"  Departure: {display_date(ticket.departure_time)}")
    print(f"  Arrival: {display_date(ticket.arrival_time)}")
    if ticket.seat_numbers:
        print(f"  Seats: {', '.join(str(s) for s in ticket.seat_numbers)}")
    for person in ticket.people:
        discount = f" [{person.discount}]" if person.discount else ""
        print(f"  Passenger: {person.first_name} {person.last_name}{discount}")
    for stop in ticket.stations:
        time = stop.departure_time or stop.arrival_time or ""
        print(f"    {stop.sequence_number:>2}. {stop.name} {display_date(time)}")
    actions = services.tickets.available_actions(ticket, scope)
    allowed = [name for name, enabled in asdict(actions).items() if enabled]
    print(f"  Actions: {', '.join(allowed) if allowed else 'none'}")


async def _handle_stations_command(services: Services, output_json: bool) -> None:
    stations = await services.stations.list_stations()
    if output_json:
        _print_json(stations)
        return
    print(f"\nFound {len(stations)} station(s):\n")
    for station in stations:
        print(f"  {station.name}")
        print(f"    ID: {station.id}")


async def _handle_nearest_command(
    services: Services, latitude: float | None, longitude: float | None, output_json: bool
) -> None:
    coordinates = None
    if latitude is not None and longitude is not None:
        coordinates = Coordinates(latitude=latitude, longitude=longitude)
    station = await services.stations.nearest_station(coordinates)
    if output_json:
        _print_json(station)
        return
    print(f"\nNearest station: {station.name} ({station.city or 'Unknown'})")
    print(f"ID: {station.id}")


async def _handle_search_command(
    services: Services, query: SearchQuery, max_pages: int, output_json: bool
) -> None:
    pages_loaded = 0
    page = await services.search.search(query)
    while page is not None:
        pages_loaded += 1
        if pages_loaded >= max_pages:
            break
        page = await services.search.load_more()
    itineraries = services.search.itineraries
    if output_json:
        _print_json(itineraries)
        return
    if not itineraries:
        print("No connections found", file=sys.stderr)
        sys.exit(1)
    print(f"\nFound {len(itineraries)} connection(s) on {pages_loaded} page(s):\n")
    for itinerary in itineraries:
        _print_itinerary(itinerary)
    if services.search.has_next_page:
        print("\nMore connections available, use --pages to load them.")


async def _handle_discounts_command(services: Services, output_json: bool) -> None:
    discounts = await services.pricing.list_discounts()
    if output_json:
        _print_json(discounts)
        return
    for discount in discounts:
        print(f"  {discount.name} ({discount.id})")


async def _handle_discount_code_command(services: Services, code: str, output_json: bool) -> None:
    discount_code = await services.pricing.validate_discount_code(code)
    if output_json:
        _print_json(discount_code)
        return
    print(f"\n{discount_code.code}: {discount_code.percentage:g}% off")
    print(f"  Valid {discount_code.valid_from} - {discount_code.valid_to}")


async def _handle_tickets_command(
    services: Services, scope: TicketScope, page: int, user_id: str | None, output_json: bool
) -> None:
    ticket_page = await services.tickets.list_tickets(user_id, scope, page=page)
    if output_json:
        _print_json(ticket_page)
        return
    print(
        f"\n{scope.value.capitalize()} tickets, page {ticket_page.page_number + 1} "
        f"of {max(ticket_page.total_pages, 1)} ({ticket_page.total_count} total):\n"
    )
    for ticket in ticket_page.items:
        print(f"  {ticket.start_station} -> {ticket.end_station}")
        print(
            f"    {DateNormalizer.format_display_date(ticket.connection_date)} "
            f"{DateNormalizer.format_display_time(ticket.departure_time)}"
            f"-{DateNormalizer.format_display_time(ticket.arrival_time)}"
        )
        print(f"    ID: {ticket.id}")
    if ticket_page.has_next_page:
        print(f"\nNext page: --page {ticket_page.page_number + 1}")


async def _handle_ticket_command(
    services: Services, ticket_id: str, scope: TicketScope, output_json: bool
) -> None:
    ticket = await services.tickets.get_details(ticket_id)
    if output_json:
        _print_json(
            {
                "ticket": asdict(ticket),
                "actions": asdict(services.tickets.available_actions(ticket, scope)),
            }
        )
        return
    _print_ticket(ticket, services, scope)


def _setup_argparse() -> Any:
    """Set up and configure argument parser."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Rail ticketing client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List stations
  rail-ticketing stations

  # Search connections, loading up to three pages
  rail-ticketing search <start-id> <end-id> 2024-06-05T08:00:00 --pages 3

  # Show archived tickets of the configured user
  rail-ticketing tickets --archive

Configuration is read from RAIL_TICKETING_* environment variables or .env.
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    stations_parser = subparsers.add_parser("stations", help="List stations")
    stations_parser.add_argument("--json", action="store_true", help="Output as JSON")

    nearest_parser = subparsers.add_parser("nearest", help="Find the nearest station")
    nearest_parser.add_argument("--latitude", type=float, help="Latitude (default: configured)")
    nearest_parser.add_argument("--longitude", type=float, help="Longitude (default: configured)")
    nearest_parser.add_argument("--json", action="store_true", help="Output as JSON")

    search_parser = subparsers.add_parser("search", help="Search connections")
    search_parser.add_argument("start_station_id", help="Departure station ID")
    search_parser.add_argument("end_station_id", help="Arrival station ID")
    search_parser.add_argument("departure_time", help="Earliest departure (ISO date-time)")
    search_parser.add_argument(
        "--pages", type=int, default=1, help="Maximum number of pages to load (default: 1)"
    )
    search_parser.add_argument("--json", action="store_true", help="Output as JSON")

    discounts_parser = subparsers.add_parser("discounts", help="List passenger discounts")
    discounts_parser.add_argument("--json", action="store_true", help="Output as JSON")

    code_parser = subparsers.add_parser("discount-code", help="Check a discount code")
    code_parser.add_argument("code", help="Discount code")
    code_parser.add_argument("--json", action="store_true", help="Output as JSON")

    tickets_parser = subparsers.add_parser("tickets", help="List your tickets")
    tickets_parser.add_argument("--archive", action="store_true", help="Show archived tickets")
    tickets_parser.add_argument("--page", type=int, default=0, help="Page number, from 0")
    tickets_parser.add_argument("--user-id", help="User ID (default: configured)")
    tickets_parser.add_argument("--json", action="store_true", help="Output as JSON")

    ticket_parser = subparsers.add_parser("ticket", help="Show ticket details")
    ticket_parser.add_argument("ticket_id", help="Ticket ID")
    ticket_parser.add_argument(
        "--archive", action="store_true", help="Evaluate actions as an archived ticket"
    )
    ticket_parser.add_argument("--json", action="store_true", help="Output as JSON")

    return parser


def _scope(args: Any) -> TicketScope:
    return TicketScope.ARCHIVE if getattr(args, "archive", False) else TicketScope.CURRENT


async def _execute_command(args: Any, services: Services) -> None:
    """Execute the appropriate command based on args."""
    if args.command == "stations":
        await _handle_stations_command(services, args.json)
    elif args.command == "nearest":
        await _handle_nearest_command(services, args.latitude, args.longitude, args.json)
    elif args.command == "search":
        query = SearchQuery(args.start_station_id, args.end_station_id, args.departure_time)
        await _handle_search_command(services, query, max(args.pages, 1), args.json)
    elif args.command == "discounts":
        await _handle_discounts_command(services, args.json)
    elif args.command == "discount-code":
        await _handle_discount_code_command(services, args.code, args.json)
    elif args.command == "tickets":
        await _handle_tickets_command(services, _scope(args), args.page, args.user_id, args.json)
    elif args.command == "ticket":
        await _handle_ticket_command(services, args.ticket_id, _scope(args), args.json)
    else:
        _setup_argparse().print_help()
        sys.exit(1)


async def main() -> None:
    """Main CLI entry point."""
    parser = _setup_argparse()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        config = AppConfig()
        logging.basicConfig(
            level=config.log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            stream=sys.stderr,
        )
        async with aiohttp.ClientSession() as session:
            await _execute_command(args, build_services(config, session))
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(1)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        for field, message in e.field_errors.items():
            print(f"  {field}: {message}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
