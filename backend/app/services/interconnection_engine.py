"""
Interconnection Engine: ricerca voli diretti e con uno scalo.

Flusso di find_interconnections():
  Step 1: validazione input (nessuna chiamata esterna se fallisce)
  Step 2: GET rotte + filtro (solo operatore supportato, niente connectingAirport)
  Step 3: voli diretti, se esiste la rotta departure → arrival
  Step 4: voli con scalo per ogni stopover X con rotte departure → X e X → arrival
  Step 5: unione deduplicata (uguaglianza strutturale degli Itinerary)

Le chiamate ai provider sono sequenziali: una per le rotte, poi una per ogni
coppia di aeroporti distinta. Gli errori dei provider (ExternalServiceError)
interrompono l'intera ricerca.

Limite noto: lo schedule viene richiesto solo per anno/mese di window_start,
quindi i voli del mese successivo non sono visibili.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from app.config import settings
from app.services.exceptions import InvalidArgument
from app.services.providers.base import Route, RoutesProvider, ScheduleFlight, SchedulesProvider
from app.utils.clock import build_timestamp, crosses_midnight, parse_clock

logger = logging.getLogger(__name__)

# Tempo minimo tra arrivo della prima tratta e partenza della seconda (strettamente maggiore).
MIN_CONNECTION_TIME = timedelta(hours=2)


@dataclass(frozen=True)
class FlightLeg:
    departure_airport: str
    arrival_airport: str
    departure_time: datetime
    arrival_time: datetime


@dataclass(frozen=True)
class Itinerary:
    """Una o due tratte; uguaglianza e hash strutturali (usati per la deduplica)."""
    legs: tuple[FlightLeg, ...]

    @property
    def stops(self) -> int:
        return len(self.legs) - 1


# ---------------------------------------------------------------------------
# Step 1: validazione
# ---------------------------------------------------------------------------

def validate_search(
    departure: str | None,
    arrival: str | None,
    departure_datetime: datetime | None,
    arrival_datetime: datetime | None,
) -> None:
    if not departure or not departure.strip():
        raise InvalidArgument("The 'departure' parameter cannot be null or empty")
    if not arrival or not arrival.strip():
        raise InvalidArgument("The 'arrival' parameter cannot be null or empty")
    if departure_datetime is None or arrival_datetime is None:
        raise InvalidArgument("Departure/arrival dates cannot be null")
    if not departure_datetime < arrival_datetime:
        raise InvalidArgument("departureDateTime must be earlier than arrivalDateTime")
    if departure == arrival:
        raise InvalidArgument("departure and arrival cannot be the same")


# ---------------------------------------------------------------------------
# Step 2: filtro rotte
# ---------------------------------------------------------------------------

def filter_routes(routes: list[Route], operator: str | None = None) -> list[Route]:
    """
    Tiene solo le rotte dell'operatore supportato e senza connectingAirport.
    Le rotte con scalo del provider duplicherebbero le connessioni costruite qui.
    """
    operator = operator or settings.supported_operator
    return [r for r in routes if r.operator == operator and not r.connecting_airport]


# ---------------------------------------------------------------------------
# Step 3: voli diretti
# ---------------------------------------------------------------------------

def _build_leg(
    departure: str,
    arrival: str,
    year: int,
    month: int,
    day: int,
    flight: ScheduleFlight,
) -> FlightLeg | None:
    """Costruisce la tratta concreta; None se orari o data non sono validi."""
    dep_clock = parse_clock(flight.departure_time)
    arr_clock = parse_clock(flight.arrival_time)
    if dep_clock is None or arr_clock is None:
        logger.debug(
            "Orario non valido %s→%s giorno %s: %r → %r",
            departure, arrival, day, flight.departure_time, flight.arrival_time,
        )
        return None

    arrival_day = day + 1 if crosses_midnight(dep_clock, arr_clock) else day

    dep_time = build_timestamp(year, month, day, dep_clock)
    arr_time = build_timestamp(year, month, arrival_day, arr_clock)
    if dep_time is None or arr_time is None:
        # es. 31 aprile, o arrivo "giorno 32" dopo un volo notturno
        logger.debug("Data non valida %s→%s: giorno %s/%02d/%d", departure, arrival, day, month, year)
        return None

    return FlightLeg(departure, arrival, dep_time, arr_time)


async def find_direct_flights(
    schedules_provider: SchedulesProvider,
    departure: str,
    arrival: str,
    window_start: datetime,
    window_end: datetime,
) -> list[Itinerary]:
    """Voli departure → arrival interamente contenuti in [window_start, window_end]."""
    year, month = window_start.year, window_start.month
    schedule = await schedules_provider.get_schedule(departure, arrival, year, month)

    flights: list[Itinerary] = []
    for schedule_day in schedule:
        for flight in schedule_day.flights:
            leg = _build_leg(departure, arrival, year, month, schedule_day.day, flight)
            if leg is None:
                continue
            if leg.departure_time >= window_start and leg.arrival_time <= window_end:
                flights.append(Itinerary(legs=(leg,)))

    logger.debug("%s→%s %d/%02d: %d voli nella finestra", departure, arrival, year, month, len(flights))
    return flights


# ---------------------------------------------------------------------------
# Step 4: voli con uno scalo
# ---------------------------------------------------------------------------

def connect_legs(first_legs: list[Itinerary], second_legs: list[Itinerary]) -> list[Itinerary]:
    """Combina ogni coppia (prima, seconda tratta) che rispetta MIN_CONNECTION_TIME."""
    connected: list[Itinerary] = []
    for first in first_legs:
        leg1 = first.legs[0]
        for second in second_legs:
            leg2 = second.legs[0]
            if leg1.arrival_time + MIN_CONNECTION_TIME < leg2.departure_time:
                connected.append(Itinerary(legs=(leg1, leg2)))
    return connected


async def find_connecting_flights(
    schedules_provider: SchedulesProvider,
    departure: str,
    stopover: str,
    arrival: str,
    window_start: datetime,
    window_end: datetime,
) -> list[Itinerary]:
    first_legs = await find_direct_flights(schedules_provider, departure, stopover, window_start, window_end)
    second_legs = await find_direct_flights(schedules_provider, stopover, arrival, window_start, window_end)
    return connect_legs(first_legs, second_legs)


# ---------------------------------------------------------------------------
# Entry point pubblico
# ---------------------------------------------------------------------------

def _sort_key(itinerary: Itinerary) -> tuple:
    first, last = itinerary.legs[0], itinerary.legs[-1]
    airports = tuple(leg.arrival_airport for leg in itinerary.legs)
    return (first.departure_time, itinerary.stops, last.arrival_time, airports)


async def find_interconnections(
    routes_provider: RoutesProvider,
    schedules_provider: SchedulesProvider,
    departure: str | None,
    arrival: str | None,
    departure_datetime: datetime | None,
    arrival_datetime: datetime | None,
) -> list[Itinerary]:
    """
    Ricerca completa: voli diretti + voli con uno scalo, senza duplicati.

    Raises:
        InvalidArgument: input non valido (prima di qualsiasi chiamata esterna).
        ExternalServiceError: fallimento del provider Routes o Schedules.
    """

    # ── Step 1: validazione
    validate_search(departure, arrival, departure_datetime, arrival_datetime)

    # ── Step 2: rotte filtrate (una sola volta per ricerca)
    routes = filter_routes(await routes_provider.get_routes())
    served = {(r.airport_from, r.airport_to) for r in routes}

    found: set[Itinerary] = set()

    # ── Step 3: voli diretti
    if (departure, arrival) in served:
        found.update(
            await find_direct_flights(schedules_provider, departure, arrival, departure_datetime, arrival_datetime)
        )

    # ── Step 4: voli con scalo (stopover deduplicati, ordine di apparizione)
    stopovers = dict.fromkeys(
        r.airport_to for r in routes
        if r.airport_from == departure and r.airport_to != arrival
    )
    for stopover in stopovers:
        if (stopover, arrival) not in served:
            continue
        connecting = await find_connecting_flights(
            schedules_provider, departure, stopover, arrival, departure_datetime, arrival_datetime,
        )
        if connecting:
            logger.info("Stopover route detected: %s -> %s -> %s", departure, stopover, arrival)
            found.update(connecting)

    # ── Step 5: risultato deduplicato (ordinato solo per stabilità della risposta)
    return sorted(found, key=_sort_key)
