"""
Fixture condivise per la test suite interconnections.

I provider esterni (Routes, Schedules) vengono simulati con unittest.mock:
nessuna chiamata HTTP reale è necessaria per eseguire i test.
"""
from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from app.services.providers.base import (
    Route,
    RoutesProvider,
    ScheduleDay,
    ScheduleFlight,
    SchedulesProvider,
)


# ---------------------------------------------------------------------------
# Costruttori di dati fittizi
# ---------------------------------------------------------------------------

def make_route(airport_from: str, airport_to: str, operator: str = "RYANAIR", connecting_airport=None) -> Route:
    return Route(
        airport_from=airport_from,
        airport_to=airport_to,
        operator=operator,
        connecting_airport=connecting_airport,
    )


def make_day(day: int, *flights: tuple[str | None, str | None]) -> ScheduleDay:
    """make_day(10, ("07:00", "08:00"), ("18:00", "19:10"))"""
    return ScheduleDay(
        day=day,
        flights=tuple(ScheduleFlight(departure_time=d, arrival_time=a) for d, a in flights),
    )


def make_routes_provider(routes: list[Route]) -> AsyncMock:
    provider = AsyncMock(spec=RoutesProvider)
    provider.get_routes.return_value = routes
    return provider


def make_schedules_provider(schedules: dict[tuple[str, str], list[ScheduleDay]]) -> AsyncMock:
    """
    Provider Schedules mockato: restituisce lo schedule per la coppia
    (departure, arrival), lista vuota per le coppie non presenti.
    Anno e mese richiesti restano ispezionabili via call_args_list.
    """
    provider = AsyncMock(spec=SchedulesProvider)

    async def _get_schedule(departure, arrival, year, month):
        return schedules.get((departure, arrival), [])

    provider.get_schedule.side_effect = _get_schedule
    return provider


# ---------------------------------------------------------------------------
# Finestra di riferimento (10 marzo 2025)
# ---------------------------------------------------------------------------

@pytest.fixture
def window_start():
    return datetime(2025, 3, 10, 6, 0)


@pytest.fixture
def window_end():
    return datetime(2025, 3, 10, 21, 0)


@pytest.fixture
def dub_stn_wro_routes():
    """DUB→STN e STN→WRO, entrambe Ryanair senza scalo."""
    return [make_route("DUB", "STN"), make_route("STN", "WRO")]
