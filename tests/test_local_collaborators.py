"""Tests for the CLI's local collaborator implementations."""

import logging

import pytest

from rail_ticketing.adapters.local_collaborators import (
    FixedLocationProvider,
    LoggingNotificationScheduler,
    LoggingRouter,
    StaticAuthSession,
)
from rail_ticketing.domain.contracts import TICKETS_ROUTE
from rail_ticketing.domain.models import Coordinates, TicketArrival


def test_static_auth_session_reports_configured_user() -> None:
    """Given a configured user, when asked, then id and email are returned."""
    session = StaticAuthSession("user-1", "anna@example.com")

    assert session.current_user_id() == "user-1"
    assert session.email() == "anna@example.com"


@pytest.mark.asyncio
async def test_fixed_location_provider_returns_coordinates() -> None:
    """Given both coordinates, when asked for a fix, then they are returned."""
    provider = FixedLocationProvider(52.23, 21.01)

    assert await provider.current_coordinates() == Coordinates(latitude=52.23, longitude=21.01)


@pytest.mark.asyncio
async def test_fixed_location_provider_without_longitude_has_no_fix() -> None:
    """Given only a latitude, when asked for a fix, then None is returned."""
    assert await FixedLocationProvider(52.23, None).current_coordinates() is None


def test_logging_router_records_history(caplog: pytest.LogCaptureFixture) -> None:
    """Given navigation requests, when routing, then each is recorded and logged."""
    router = LoggingRouter()

    with caplog.at_level(logging.INFO):
        router.navigate(TICKETS_ROUTE, {"message": "Done"})
        router.navigate("payment")

    assert router.history == [(TICKETS_ROUTE, {"message": "Done"}), ("payment", {})]
    assert f"Navigate to {TICKETS_ROUTE}" in caplog.text


@pytest.mark.asyncio
async def test_logging_scheduler_logs_each_arrival(caplog: pytest.LogCaptureFixture) -> None:
    """Given arrivals, when scheduling, then one log line per arrival is written."""
    arrivals = [
        TicketArrival(city_name="Kraków", arrival_time="2024-06-05T10:30:00"),
        TicketArrival(city_name="Katowice", arrival_time="2024-06-05T11:45:00"),
    ]

    with caplog.at_level(logging.INFO):
        await LoggingNotificationScheduler().schedule_arrival(arrivals)

    assert "Arrival in Kraków at 2024-06-05T10:30:00" in caplog.text
    assert "Arrival in Katowice" in caplog.text
