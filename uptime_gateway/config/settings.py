from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Uptime Gateway"
    app_version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Upstream monitoring API
    api_url: str = ""
    api_key: str = ""
    request_timeout_seconds: int = 10

    # Optional login gate, enabled only when both are set
    site_password: str = ""
    site_secret_key: str = ""
    auth_cookie_name: str = "authToken"
    auth_token_ttl_days: int = 7
    jwt_algorithm: str = "HS256"

    count_days: int = 60
    timezone: str = "UTC"

    cache_key: str = "site-data-v3"
    cache_ttl_seconds: int = 60

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @property
    def auth_enabled(self) -> bool:
        return bool(self.site_password and self.site_secret_key)


settings = Settings()
