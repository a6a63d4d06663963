import logging
from functools import lru_cache
from typing import Annotated, List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()

DEFAULT_DATABASE_URL = "sqlite:///./bloghub.db"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Database: DATABASE_URL, or the DB_* parts of a PostgreSQL URL
    database_url: Optional[str] = Field(None, alias="DATABASE_URL")
    db_user: Optional[str] = Field(None, alias="DB_USER")
    db_pass: Optional[str] = Field(None, alias="DB_PASS")
    db_host: Optional[str] = Field(None, alias="DB_HOST")
    db_port: int = Field(5432, alias="DB_PORT")
    db_name: Optional[str] = Field(None, alias="DB_NAME")

    # Tokens
    jwt_secret: Optional[str] = Field(None, alias="JWT_SECRET")
    jwt_expires_in: str = Field("7d", alias="JWT_EXPIRES_IN")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")

    # Server
    port: int = Field(8000, alias="PORT")
    cors_origins: Annotated[List[str], NoDecode] = Field(["http://localhost:5173"], alias="CORS_ORIGIN")
    sync_external_identities: bool = Field(False, alias="SYNC_EXTERNAL_IDENTITIES")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    @field_validator("jwt_secret", "database_url", mode="before")
    @classmethod
    def empty_is_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value):
        # CORS_ORIGIN is a comma-separated list
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("log_level")
    @classmethod
    def upper_level(cls, value: str) -> str:
        return value.upper()

    @model_validator(mode="after")
    def compose_database_url(self):
        if not self.database_url:
            if self.db_name:
                self.database_url = (
                    f"postgresql://{self.db_user}:{self.db_pass}"
                    f"@{self.db_host}:{self.db_port}/{self.db_name}"
                )
            else:
                self.database_url = DEFAULT_DATABASE_URL
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
