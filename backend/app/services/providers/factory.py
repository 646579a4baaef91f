"""
Provider Factory: sceglie le implementazioni concrete delle porte.

Il nome del provider arriva da ROUTES_PROVIDER / SCHEDULES_PROVIDER nel .env.
Le funzioni sono usate anche come dependency FastAPI dall'endpoint
interconnections (sostituibili con app.dependency_overrides nei test).
"""
from app.config import settings
from app.services.providers.base import RoutesProvider, SchedulesProvider
from app.services.providers.ryanair import RyanairRoutesProvider, RyanairSchedulesProvider

_ROUTES_PROVIDERS = {
    "ryanair": lambda: RyanairRoutesProvider(settings.routes_url, timeout=settings.http_timeout_seconds),
}

_SCHEDULES_PROVIDERS = {
    "ryanair": lambda: RyanairSchedulesProvider(settings.schedules_url, timeout=settings.http_timeout_seconds),
}


def get_routes_provider() -> RoutesProvider:
    try:
        return _ROUTES_PROVIDERS[settings.routes_provider]()
    except KeyError:
        raise ValueError(f"Routes provider sconosciuto: {settings.routes_provider!r}") from None


def get_schedules_provider() -> SchedulesProvider:
    try:
        return _SCHEDULES_PROVIDERS[settings.schedules_provider]()
    except KeyError:
        raise ValueError(f"Schedules provider sconosciuto: {settings.schedules_provider!r}") from None
