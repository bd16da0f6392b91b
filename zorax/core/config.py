from typing import List

from dotenv import load_dotenv
from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env", extra="ignore")

    API_V1_STR: str = Field("/api", description="Prefix for every API route")
    ENV: str = Field("dev", description="Application environment (dev, staging, production)")
    PROJECT_NAME: str = Field("Zorax", description="Name of the project")

    # "sqlite://" gives an in-memory database shared by every connection.
    DATABASE_URI: str = Field("sqlite:///./zorax.db", description="Database URI for SQLAlchemy")

    SERVER_PORT: int = Field(5000, description="Port on which the server runs")
    ALLOWED_ORIGINS: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"],
        description="Origins allowed to send credentialed requests",
    )

    SESSION_COOKIE_NAME: str = Field("zorax.sid", description="Name of the session cookie")
    SESSION_MAX_AGE: int = Field(24 * 60 * 60, description="Session lifetime in seconds (fixed, not sliding)")
    SESSION_COOKIE_SECURE: bool = Field(False, description="Send the session cookie over HTTPS only")

    PASSWORD_HASH_ROUNDS: int = Field(12, ge=4, le=31, description="bcrypt cost factor")
    SEED_DEFAULT_USERS: bool = Field(True, description="Create the default admin and staff accounts on startup")

    LOG_DIR: str = Field("logs", description="Directory for rotating log files")
    LOG_LEVEL: str = Field("DEBUG", description="Console log level")

    @field_validator("DATABASE_URI", "SESSION_COOKIE_NAME")
    @classmethod
    def not_empty(cls, v, info: ValidationInfo):
        if not v:
            raise ValueError(f"{info.field_name} cannot be empty")
        return v


settings = Settings()
