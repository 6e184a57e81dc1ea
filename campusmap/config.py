from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    CAMPUS_TIME_ZONE: str = "America/Chicago"
    EVENTS_PATH: str = "./data/events.json"
    SHUTTLE_ROUTES_CSV: str = "./data/shuttle_routes_all.csv"
    SHUTTLE_STOP_LOOKUP: str = "./data/shuttle-stop-locations.json"
    SHUTTLE_ROUTES_OUTPUT: str = "./data/shuttle_routes.json"
    OPENAI_MODEL: str = "gpt-4o-mini"
    ASSISTANT_MAX_OUTPUT_TOKENS: int = 1200
    ASSISTANT_TEMPERATURE: float = 0.1


settings = Settings()
