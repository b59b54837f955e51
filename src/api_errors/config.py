from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Error translation settings loaded from environment variables.

    Pydantic Settings reads env vars matching field names (case-insensitive),
    and a .env file in development.
    """

    # How many ExecutionError wrappers the translator may unwrap before it
    # gives up and reports the outermost wrapper as an unclassified error.
    # 0 disables unwrapping.
    error_max_unwrap_depth: int = Field(default=1, ge=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
