from datetime import datetime

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Interconnections: JSON in camelCase (departureAirport, arrivalDateTime, ...)
# ---------------------------------------------------------------------------

class LegOut(BaseModel):
    departure_airport: str
    arrival_airport: str
    departure_date_time: datetime
    arrival_date_time: datetime

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class InterconnectionOut(BaseModel):
    stops: int
    legs: list[LegOut]

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


# ---------------------------------------------------------------------------
# Errori: stesso formato per 400 / 502 / 500
# ---------------------------------------------------------------------------

class ErrorOut(BaseModel):
    error: str
