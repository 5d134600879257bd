# application_service/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    PROJECT_NAME: str = "Application Service API"
    PROJECT_VERSION: str = "1.0.0"
    PROJECT_DESCRIPTION: str = "Users, ride groups and group chat over FastAPI"
    SERVICE_NAME: str = "application-service"
    API_PREFIX: str = ""
    DOCS_URL: str = "/api-docs"
    LOG_LEVEL: str = "INFO"

    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    BCRYPT_ROUNDS: int = 10

    DATABASE_URL: str = "sqlite+aiosqlite:///:memory:"
    REDIS_HOST: str
    REDIS_PORT: int
    # overrides the Redis storage, e.g. "async+memory://"
    RATE_LIMIT_STORAGE_URL: str | None = None

    RATE_LIMIT_WINDOW_SECONDS: int = 60
    RATE_LIMIT_DEFAULT: int = 60
    RATE_LIMIT_MESSAGES: int = 30
    RATE_LIMIT_SEARCH: int = 20

    model_config = SettingsConfigDict(env_file=".env", extra="allow")

    @property
    def rate_limit_storage_url(self) -> str:
        if self.RATE_LIMIT_STORAGE_URL:
            return self.RATE_LIMIT_STORAGE_URL
        return f"async+redis://{self.REDIS_HOST}:{self.REDIS_PORT}/0"
