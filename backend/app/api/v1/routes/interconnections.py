from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.models.schemas import ErrorOut, InterconnectionOut, LegOut
from app.services.interconnection_engine import find_interconnections
from app.services.providers.base import RoutesProvider, SchedulesProvider
from app.services.providers.factory import get_routes_provider, get_schedules_provider

router = APIRouter()

RoutesDep = Annotated[RoutesProvider, Depends(get_routes_provider)]
SchedulesDep = Annotated[SchedulesProvider, Depends(get_schedules_provider)]


def _normalize_code(code: str | None) -> str | None:
    """Codice IATA senza spazi e in maiuscolo; None resta None (lo rifiuta il motore)."""
    return code.strip().upper() if code is not None else None


"""
Endpoint Interconnections.

GET /api/v1/interconnections
  ?departure=DUB
  &arrival=WRO
  &departureDateTime=2025-03-10T07:00
  &arrivalDateTime=2025-03-10T21:00

I parametri mancanti NON vengono rifiutati da FastAPI: arrivano come None e la
validazione del motore solleva InvalidArgument (→ 400, vedi app.main).
"""
@router.get(
    "",
    response_model=list[InterconnectionOut],
    responses={
        400: {"model": ErrorOut, "description": "Parametri mancanti o non validi"},
        502: {"model": ErrorOut, "description": "Provider Routes o Schedules non disponibile"},
        500: {"model": ErrorOut, "description": "Errore interno"},
    },
)
async def get_interconnections(
    routes_provider: RoutesDep,
    schedules_provider: SchedulesDep,
    departure: Annotated[str | None, Query(description="Codice IATA aeroporto di partenza")] = None,
    arrival: Annotated[str | None, Query(description="Codice IATA aeroporto di arrivo")] = None,
    departure_date_time: Annotated[
        datetime | None,
        Query(alias="departureDateTime", description="Inizio finestra (ISO 8601, senza offset)"),
    ] = None,
    arrival_date_time: Annotated[
        datetime | None,
        Query(alias="arrivalDateTime", description="Fine finestra (ISO 8601, senza offset)"),
    ] = None,
) -> list[InterconnectionOut]:

    itineraries = await find_interconnections(
        routes_provider,
        schedules_provider,
        departure=_normalize_code(departure),
        arrival=_normalize_code(arrival),
        departure_datetime=departure_date_time,
        arrival_datetime=arrival_date_time,
    )

    return [
        InterconnectionOut(
            stops=it.stops,
            legs=[
                LegOut(
                    departure_airport=leg.departure_airport,
                    arrival_airport=leg.arrival_airport,
                    departure_date_time=leg.departure_time,
                    arrival_date_time=leg.arrival_time,
                )
                for leg in it.legs
            ],
        )
        for it in itineraries
    ]
