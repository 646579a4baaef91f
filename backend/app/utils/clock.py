"""
Utility orari/calendario per gli schedule dei provider.

Funzioni pure e "fallibili": restituiscono None invece di sollevare eccezioni,
così il leg finder può scartare la singola voce e proseguire.
"""
import re
from datetime import datetime, time

_CLOCK_RE = re.compile(r"^\d{2}:\d{2}$")


def parse_clock(raw: str | None) -> time | None:
    """Converte un orario 'HH:MM' (24h) in time. None se mancante o malformato."""
    if not isinstance(raw, str) or not _CLOCK_RE.match(raw):
        return None
    try:
        return datetime.strptime(raw, "%H:%M").time()
    except ValueError:
        # es. "24:00" o "12:60"
        return None


def build_timestamp(year: int, month: int, day: int, clock: time) -> datetime | None:
    """
    Costruisce il timestamp completo (naive, risoluzione al minuto).

    Restituisce None se il giorno non esiste nel mese indicato
    (es. 31 aprile, oppure 32 in qualsiasi mese) o è fuori scala per datetime.
    """
    try:
        return datetime(year, month, day, clock.hour, clock.minute)
    except (ValueError, OverflowError):
        return None


def crosses_midnight(departure: time, arrival: time) -> bool:
    """True se l'arrivo è prima della partenza: il volo atterra il giorno dopo."""
    return arrival < departure
