"""
Eccezioni del dominio interconnections.

Tassonomia esposta ai chiamanti:
  InvalidArgument       → input non valido, rilevato prima di ogni chiamata esterna (HTTP 400)
  ExternalServiceError  → fallimento del provider Routes o Schedules (HTTP 502)

Gli errori di parsing/calendario sulla singola voce di schedule NON fanno parte
di questa gerarchia: vengono assorbiti nel leg finder.
"""


class InterconnectionsError(Exception):
    """Base per tutti gli errori della ricerca."""


class InvalidArgument(InterconnectionsError, ValueError):
    """Parametri di ricerca mancanti o incoerenti."""


class ExternalServiceError(InterconnectionsError, RuntimeError):
    """Chiamata al provider Routes o Schedules fallita (rete, status HTTP, JSON)."""

    def __init__(self, service: str, message: str, status_code: int | None = None) -> None:
        self.service = service
        self.status_code = status_code
        super().__init__(f"Error while querying the {service} API: {message}")
