"""
Ryanair Routes / Schedules: adapter HTTP verso gli endpoint pubblici Ryanair.

Endpoint (nessuna API key richiesta):
  GET {routes_url}                                          → lista rotte
  GET {schedules_url}/{dep}/{arr}/years/{year}/months/{m}   → orari mensili

Ogni chiamata apre il proprio httpx.AsyncClient: nessuno stato condiviso tra
ricerche concorrenti. Qualsiasi errore di rete, status non-2xx o JSON non
leggibile viene convertito in ExternalServiceError (nessun retry).
"""
import logging

import httpx

from app.services.exceptions import ExternalServiceError
from app.services.providers.base import (
    Route,
    RoutesProvider,
    ScheduleDay,
    ScheduleFlight,
    SchedulesProvider,
)

logger = logging.getLogger(__name__)

# L'endpoint routes rifiuta client senza header "da browser"
_BROWSER_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64)",
    "Accept": "application/json, text/javascript, */*; q=0.01",
    "Referer": "https://www.ryanair.com",
}


def _parse_route(item: dict) -> Route | None:
    """Normalizza una rotta Ryanair nel formato Route."""
    try:
        return Route(
            airport_from=item["airportFrom"],
            airport_to=item["airportTo"],
            operator=item.get("operator") or "",
            connecting_airport=item.get("connectingAirport"),
        )
    except (KeyError, TypeError, AttributeError):
        return None


def _parse_flight(item: dict) -> ScheduleFlight | None:
    """Orari grezzi di un singolo volo; None se la voce non è un oggetto."""
    if not isinstance(item, dict):
        return None
    return ScheduleFlight(
        departure_time=item.get("departureTime"),
        arrival_time=item.get("arrivalTime"),
    )


def _parse_day(item: dict) -> ScheduleDay | None:
    """
    Normalizza un giorno dello schedule; 'flights' mancante = nessun volo quel giorno.
    Le voci di volo non valide vengono scartate una alla volta, il giorno resta.
    """
    try:
        day = item["day"]
        flights_raw = item.get("flights") or []
    except (KeyError, TypeError, AttributeError):
        return None
    if not isinstance(day, int) or isinstance(day, bool):
        return None
    if not isinstance(flights_raw, list):
        flights_raw = []

    flights: list[ScheduleFlight] = []
    for raw in flights_raw:
        flight = _parse_flight(raw)
        if flight is None:
            logger.debug("Schedules giorno %d: volo scartato: %r", day, raw)
            continue
        flights.append(flight)
    return ScheduleDay(day=day, flights=tuple(flights))


async def _get_json(
    service: str,
    url: str,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None = None,
    headers: dict | None = None,
):
    """GET + decodifica JSON, con mappatura uniforme degli errori su ExternalServiceError."""
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            resp = await client.get(url, headers=headers)
        resp.raise_for_status()
        return resp.json()
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        logger.warning("%s API %s: HTTP %d: %s", service, url, status, exc.response.text[:300])
        raise ExternalServiceError(service, f"HTTP {status}", status_code=status) from exc
    except httpx.HTTPError as exc:
        logger.warning("%s API %s: %s: %s", service, url, type(exc).__name__, exc)
        raise ExternalServiceError(service, type(exc).__name__) from exc
    except ValueError as exc:
        logger.warning("%s API %s: risposta non JSON: %s", service, url, exc)
        raise ExternalServiceError(service, "invalid JSON response") from exc


class RyanairRoutesProvider(RoutesProvider):

    def __init__(
        self,
        routes_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.routes_url = routes_url
        self.timeout = timeout
        self.transport = transport

    async def get_routes(self) -> list[Route]:
        data = await _get_json("Routes", self.routes_url, self.timeout, self.transport, _BROWSER_HEADERS)
        if not isinstance(data, list):
            raise ExternalServiceError("Routes", "unexpected payload (expected a JSON array)")

        logger.debug("Routes API: %d rotte ricevute", len(data))
        routes = [_parse_route(item) for item in data]
        return [r for r in routes if r is not None]


class RyanairSchedulesProvider(SchedulesProvider):

    def __init__(
        self,
        schedules_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.schedules_url = schedules_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def get_schedule(
        self,
        departure: str,
        arrival: str,
        year: int,
        month: int,
    ) -> list[ScheduleDay]:
        url = f"{self.schedules_url}/{departure}/{arrival}/years/{year}/months/{month}"
        data = await _get_json("Schedules", url, self.timeout, self.transport)

        # Nessun campo "days" → nessuno schedule per il mese (non è un errore)
        if not isinstance(data, dict) or not isinstance(data.get("days"), list):
            logger.debug("Schedules %s→%s %d/%02d: nessun campo 'days'", departure, arrival, year, month)
            return []

        days: list[ScheduleDay] = []
        for item in data["days"]:
            parsed = _parse_day(item)
            if parsed is None:
                logger.debug("Schedules %s→%s: giorno scartato: %r", departure, arrival, item)
                continue
            days.append(parsed)
        return days
