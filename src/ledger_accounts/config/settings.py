"""Runtime settings loaded from environment variables."""

from functools import lru_cache
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

NonEmptyStr = Annotated[str, Field(min_length=1)]
BcryptRounds = Annotated[int, Field(ge=4, le=31)]
PortNumber = Annotated[int, Field(gt=0, lt=65536)]


class Settings(BaseSettings):
    """Environment-driven application settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: NonEmptyStr = Field(validation_alias="DATABASE_URL")
    bcrypt_rounds: BcryptRounds = Field(default=10, validation_alias="BCRYPT_ROUNDS")
    account_api_host: NonEmptyStr = Field(default="0.0.0.0", validation_alias="ACCOUNT_API_HOST")
    account_api_port: PortNumber = Field(default=8000, validation_alias="ACCOUNT_API_PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache application settings."""

    return Settings()  # type: ignore[call-arg]
