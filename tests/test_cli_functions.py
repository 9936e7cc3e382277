"""Tests for CLI argument parsing and command dispatch."""

import sys
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID

import pytest

from rail_ticketing import cli
from rail_ticketing.cli import Services, _execute_command, _scope, _setup_argparse, main
from rail_ticketing.domain.errors import NetworkError, ValidationError
from rail_ticketing.domain.models import (
    Discount,
    Itinerary,
    ItineraryPage,
    SearchQuery,
    Station,
    TicketActions,
    TicketDetails,
    TicketPage,
    TicketScope,
    TicketStatus,
    TicketSummary,
)


def _services() -> Services:
    return Services(stations=MagicMock(), search=MagicMock(), pricing=MagicMock(), tickets=MagicMock())


def _itinerary() -> Itinerary:
    return Itinerary(
        start_station="Warszawa Centralna",
        end_station="Kraków Główny",
        departure_time="2024-06-05T08:00:00",
        arrival_time="2024-06-05T10:30:00",
        total_duration="02:30",
        transfers_count=0,
    )


class TestArgparse:
    """Tests for the argument parser."""

    def test_search_arguments(self) -> None:
        """Given search arguments, when parsing, then stations, time and pages are set."""
        args = _setup_argparse().parse_args(
            ["search", "st-1", "st-2", "2024-06-05T08:00:00", "--pages", "3"]
        )

        assert args.command == "search"
        assert args.start_station_id == "st-1"
        assert args.end_station_id == "st-2"
        assert args.departure_time == "2024-06-05T08:00:00"
        assert args.pages == 3
        assert args.json is False

    def test_tickets_defaults_to_current_scope(self) -> None:
        """Given tickets without --archive, when parsing, then the current scope and page 0 are used."""
        args = _setup_argparse().parse_args(["tickets"])

        assert _scope(args) is TicketScope.CURRENT
        assert args.page == 0
        assert args.user_id is None

    def test_archive_flag_selects_archive_scope(self) -> None:
        """Given --archive, when parsing, then the archive scope is used."""
        args = _setup_argparse().parse_args(["ticket", "t-1", "--archive", "--json"])

        assert _scope(args) is TicketScope.ARCHIVE
        assert args.ticket_id == "t-1"
        assert args.json is True

    def test_nearest_coordinates_are_floats(self) -> None:
        """Given coordinates, when parsing, then they are floats."""
        args = _setup_argparse().parse_args(["nearest", "--latitude", "52.23", "--longitude", "21.0"])

        assert args.latitude == pytest.approx(52.23)
        assert args.longitude == pytest.approx(21.0)


class TestExecuteCommand:
    """Tests for command dispatch."""

    @pytest.mark.asyncio
    async def test_stations_command_prints_stations(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Given stations, when running the stations command, then each is printed."""
        services = _services()
        services.stations.list_stations = AsyncMock(
            return_value=[Station(id="st-1", name="Gdańsk Główny")]
        )
        args = _setup_argparse().parse_args(["stations"])

        await _execute_command(args, services)

        out = capsys.readouterr().out
        assert "Found 1 station(s)" in out
        assert "Gdańsk Główny" in out

    @pytest.mark.asyncio
    async def test_search_loads_up_to_max_pages(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Given --pages 2 and more pages available, when searching, then one extra page is loaded."""
        services = _services()
        page = ItineraryPage(items=(_itinerary(),), has_next_page=True, next_cursor="c")
        services.search.search = AsyncMock(return_value=page)
        services.search.load_more = AsyncMock(return_value=page)
        services.search.itineraries = [_itinerary(), _itinerary()]
        services.search.has_next_page = True
        args = _setup_argparse().parse_args(
            ["search", "st-1", "st-2", "2024-06-05T08:00:00", "--pages", "2"]
        )

        await _execute_command(args, services)

        services.search.search.assert_awaited_once_with(
            SearchQuery("st-1", "st-2", "2024-06-05T08:00:00")
        )
        services.search.load_more.assert_awaited_once()
        out = capsys.readouterr().out
        assert "Found 2 connection(s) on 2 page(s)" in out
        assert "More connections available" in out

    @pytest.mark.asyncio
    async def test_search_without_results_exits(self) -> None:
        """Given no connections, when searching, then the command exits with status 1."""
        services = _services()
        services.search.search = AsyncMock(return_value=ItineraryPage())
        services.search.load_more = AsyncMock(return_value=None)
        services.search.itineraries = []
        args = _setup_argparse().parse_args(["search", "st-1", "st-2", "2024-06-05T08:00:00"])

        with pytest.raises(SystemExit) as exc_info:
            await _execute_command(args, services)

        assert exc_info.value.code == 1

    @pytest.mark.asyncio
    async def test_discounts_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Given --json, when listing discounts, then JSON is printed."""
        services = _services()
        services.pricing.list_discounts = AsyncMock(
            return_value=[Discount(id=UUID("2b1f4a52-9d54-4c1f-8a53-1b6a1f0b8e11"), name="Student")]
        )
        args = _setup_argparse().parse_args(["discounts", "--json"])

        await _execute_command(args, services)

        out = capsys.readouterr().out
        assert '"name": "Student"' in out
        assert "2b1f4a52-9d54-4c1f-8a53-1b6a1f0b8e11" in out

    @pytest.mark.asyncio
    async def test_tickets_command_passes_scope_and_page(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Given --archive --page 1, when listing tickets, then both reach the lifecycle manager."""
        services = _services()
        services.tickets.list_tickets = AsyncMock(
            return_value=TicketPage(
                items=(
                    TicketSummary(
                        id="t-1",
                        start_station="Warszawa Centralna",
                        end_station="Kraków Główny",
                        departure_time="08:00",
                        arrival_time="10:30",
                        connection_date="2024-06-05",
                    ),
                ),
                page_number=1,
                page_size=10,
                total_count=11,
                total_pages=2,
            )
        )
        args = _setup_argparse().parse_args(["tickets", "--archive", "--page", "1"])

        await _execute_command(args, services)

        services.tickets.list_tickets.assert_awaited_once_with(None, TicketScope.ARCHIVE, page=1)
        out = capsys.readouterr().out
        assert "Archive tickets, page 2 of 2" in out
        assert "Warszawa Centralna -> Kraków Główny" in out

    @pytest.mark.asyncio
    async def test_ticket_json_includes_actions(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Given --json, when showing a ticket, then its available actions are included."""
        services = _services()
        ticket = TicketDetails(
            id="t-1",
            ticket_number=1001,
            status=TicketStatus.PAID,
            departure_time="2024-06-05T08:00:00",
            arrival_time="2024-06-05T10:30:00",
            connection_date="2024-06-05",
            operator_code="IC",
            operator_name="PKP Intercity",
            train_name="Sobieski",
        )
        services.tickets.get_details = AsyncMock(return_value=ticket)
        services.tickets.available_actions = MagicMock(
            return_value=TicketActions(
                can_cancel=True, can_request_refund=False, can_show_qr_code=False
            )
        )
        args = _setup_argparse().parse_args(["ticket", "t-1", "--json"])

        await _execute_command(args, services)

        out = capsys.readouterr().out
        assert '"id": "t-1"' in out
        assert '"status": "PAID"' in out
        assert '"can_cancel": true' in out
        services.tickets.available_actions.assert_called_once_with(ticket, TicketScope.CURRENT)


class TestMain:
    """Tests for the async entry point."""

    @pytest.mark.asyncio
    async def test_no_command_prints_help_and_exits(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Given no sub-command, when running main, then help is printed and it exits with 1."""
        monkeypatch.setattr(sys, "argv", ["rail-ticketing"])

        with pytest.raises(SystemExit) as exc_info:
            await main()

        assert exc_info.value.code == 1
        assert "usage:" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_errors_are_printed_to_stderr(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Given the API is unreachable, when running a command, then the error goes to stderr."""
        monkeypatch.setattr(sys, "argv", ["rail-ticketing", "stations"])
        monkeypatch.setattr(
            cli,
            "_execute_command",
            AsyncMock(side_effect=NetworkError("Could not reach the ticketing service")),
        )

        with pytest.raises(SystemExit) as exc_info:
            await main()

        assert exc_info.value.code == 1
        assert "Error: Could not reach the ticketing service" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_validation_errors_list_fields(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Given a ValidationError, when running a command, then each field error is printed."""
        monkeypatch.setattr(sys, "argv", ["rail-ticketing", "discount-code", " "])
        monkeypatch.setattr(
            cli,
            "_execute_command",
            AsyncMock(side_effect=ValidationError({"email": "Email is invalid"})),
        )

        with pytest.raises(SystemExit):
            await main()

        assert "email: Email is invalid" in capsys.readouterr().err
