from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Provider esterni (endpoint pubblici Ryanair)
    routes_provider: str = "ryanair"
    schedules_provider: str = "ryanair"
    routes_url: str = "https://services-api.ryanair.com/views/locate/3/routes"
    schedules_url: str = "https://services-api.ryanair.com/timtbl/3/schedules"
    http_timeout_seconds: float = 30.0

    # Unico vettore supportato dalla ricerca
    supported_operator: str = "RYANAIR"

    # App
    app_env: str = "development"

    class Config:
        env_file = ".env"


# Istanza globale usata in tutto il progetto
settings = Settings()
