from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_ENV: str = "development"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://myapp.com,https://api.myapp.com"
    CORS_ORIGINS: str = "*"

    # "json" in production, "text" for local development.
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"

    # Used for date fields when the payload carries no `dateFormat` / `locale`.
    DEFAULT_DATE_FORMAT: str = "yyyy-MM-dd"
    DEFAULT_LOCALE: str = "en"

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
