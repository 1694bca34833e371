from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    log_level: str = "INFO"
    api_base: str = "/api"

    # DATABASE_URL wins; otherwise the libpq-style PG* variables are combined.
    database_url: str = ""
    pguser: str = "cafeteria"
    pgpassword: str = "cafeteria"
    pghost: str = "localhost"
    pgport: int = 5432
    pgdatabase: str = "cafeteria"

    student_token_key: SecretStr = SecretStr("")
    admin_token_key: SecretStr = SecretStr("")
    jwt_algorithm: str = "HS256"
    admin_token_ttl_hours: int = 12

    bootstrap_admin_username: str = ""
    bootstrap_admin_password: str = ""

    cors_allow_origins: str = "*"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @model_validator(mode="after")
    def _fill_database_url(self) -> "Settings":
        if not self.database_url:
            self.database_url = (
                f"postgresql+asyncpg://{self.pguser}:{self.pgpassword}"
                f"@{self.pghost}:{self.pgport}/{self.pgdatabase}"
            )
        return self

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


settings = Settings()
