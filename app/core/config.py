from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import AnyHttpUrl, BaseSettings, Field, validator
from dotenv import load_dotenv


BASE_DIR = Path(__file__).resolve().parent.parent.parent
ENV_FILE = BASE_DIR / ".env"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    PROJECT_NAME: str = "Storefront API"
    API_PREFIX: str = ""

    DATABASE_URL: str = Field(..., env="DATABASE_URL")
    DB_POOL_SIZE: int = Field(default=10, ge=1)
    DB_MAX_OVERFLOW: int = Field(default=5, ge=0)
    DB_POOL_TIMEOUT_SECONDS: float = Field(default=5.0, gt=0)
    DB_STATEMENT_TIMEOUT_MS: Optional[int] = Field(default=15000, ge=0)

    JWT_SECRET_KEY: str = Field(..., env="JWT_SECRET_KEY")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60, ge=1)

    PASSWORD_HASHING_ROUNDS: int = Field(default=12, ge=4)

    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE_PATH: Optional[str] = Field(default=None)

    CORS_ORIGINS: list[AnyHttpUrl] | list[str] = Field(default_factory=lambda: ["*"])

    DEFAULT_ADMIN_USERNAME: str = Field(default="admin", env="DEFAULT_ADMIN_USERNAME")
    DEFAULT_ADMIN_PASSWORD: str = Field(default="", env="DEFAULT_ADMIN_PASSWORD")

    class Config:
        case_sensitive = True
        env_file = str(ENV_FILE)
        env_file_encoding = "utf-8"

    @validator("CORS_ORIGINS", pre=True)
    def assemble_cors_origins(cls, v: str | list[str]) -> list[str]:
        if isinstance(v, str):
            v = v.strip().strip('"\'')
            if v == "*":
                return ["*"]
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


load_dotenv(ENV_FILE)


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()
