# food_resources/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    app_name: str = Field(default="Atlanta Food Resources API", alias="APP_NAME")
    app_env: str = Field(default="dev", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Dataset
    data_path: Path = Field(default=PACKAGE_DIR / "data" / "food_resources.json", alias="DATA_PATH")

    # HTTP
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    api_host: str = Field(default="127.0.0.1", alias="API_HOST")
    api_port: int = Field(default=8000, alias="API_PORT")

    # Geocoding (Nominatim usage policy: at most one request per second)
    nominatim_base: str = Field(default="https://nominatim.openstreetmap.org", alias="NOMINATIM_BASE")
    geocoder_user_agent: str = Field(default="Atlanta-Food-Resources/1.0", alias="GEOCODER_USER_AGENT")
    geocoder_delay_seconds: float = Field(default=1.1, ge=0, alias="GEOCODER_DELAY_SECONDS")

    model_config = SettingsConfigDict(
        env_file=str(PACKAGE_DIR / ".env"),  # food_resources/.env
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

settings = Settings()
