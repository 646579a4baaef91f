"""
Provider Layer: porte astratte verso le due sorgenti dati esterne.

Il codice applicativo (interconnection_engine) usa solo queste classi.
I provider concreti vengono scelti dalla factory tramite ROUTES_PROVIDER /
SCHEDULES_PROVIDER nel .env; nei test vengono sostituiti da mock.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Route:
    """Coppia di aeroporti servita dal provider (non un volo concreto)."""
    airport_from: str                       # codice IATA (es. "DUB")
    airport_to: str                         # codice IATA (es. "WRO")
    operator: str                           # es. "RYANAIR"
    connecting_airport: str | None = None   # valorizzato solo per prodotti multi-tratta del provider


@dataclass(frozen=True)
class ScheduleFlight:
    """Orari grezzi 'HH:MM' così come arrivano dal provider (possono essere malformati)."""
    departure_time: str | None
    arrival_time: str | None


@dataclass(frozen=True)
class ScheduleDay:
    day: int                                # giorno del mese, non validato dal provider
    flights: tuple[ScheduleFlight, ...] = ()


class RoutesProvider(ABC):

    @abstractmethod
    async def get_routes(self) -> list[Route]:
        """
        Restituisce l'elenco completo delle rotte (nessuna paginazione).

        Raises:
            ExternalServiceError: se la chiamata al provider fallisce.
        """
        ...


class SchedulesProvider(ABC):

    @abstractmethod
    async def get_schedule(
        self,
        departure: str,
        arrival: str,
        year: int,
        month: int,
    ) -> list[ScheduleDay]:
        """
        Restituisce gli orari mensili per la coppia (departure, arrival).
        Lista vuota se il provider non ha uno schedule per quel mese.

        Raises:
            ExternalServiceError: se la chiamata al provider fallisce.
        """
        ...
