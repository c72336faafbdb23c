from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONNECTION_STRING = "user=crudwizard password=crudwizard dbname=crudwizard sslmode=disable"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "CRUD Wizard API"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # Database
    postgres_connection_string: str = DEFAULT_CONNECTION_STRING
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Auth
    auth_token_expire_days: int = 30
    argon2_time_cost: int = 3
    argon2_memory_cost: int = 65536
    argon2_parallelism: int = 1

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    @field_validator("postgres_connection_string", mode="before")
    @classmethod
    def default_empty_connection_string(cls, v: str | None) -> str:
        """An unset or empty POSTGRES_CONNECTION_STRING means the default."""
        if v is None or v == "":
            return DEFAULT_CONNECTION_STRING
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Validate CORS origins - reject wildcards when credentials are used."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
