from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # In-memory SQLite is shared by every session of the process
    database_url: str = "sqlite+pysqlite:///:memory:"

    host: str = "127.0.0.1"
    port: int = 8000

    log_level: str = "INFO"

    # Rate limits (slowapi syntax)
    rate_limit_default: str = "100/minute"
    shopping_list_rate_limit: str = "30/minute"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost",
        "http://127.0.0.1",
    ]


settings = Settings()
