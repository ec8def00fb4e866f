"""
Configuration management
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

# db_type -> SQLAlchemy driver name
DRIVERS = {
    "postgres": "postgresql+psycopg2",
    "sqlite": "sqlite",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_prefix="USER_GRAPHQL_", env_file=".env", extra="ignore")

    # Database
    database_url: Optional[str] = None
    db_type: str = "postgres"
    db_host: str = "localhost"
    db_port: int = 5432
    db_username: str = "postgres"
    db_password: str = ""
    db_name: str = "postgres"
    synchronize: bool = True
    sql_echo: bool = True

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 4000
    graphql_path: str = "/graphql"

    # Environment
    debug: bool = True
    seed_demo_users: int = 0

    def sqlalchemy_url(self) -> str:
        """Return the configured URL, or one assembled from the db_* parts."""
        if self.database_url:
            return self.database_url

        try:
            driver = DRIVERS[self.db_type]
        except KeyError:
            raise ValueError(f"Unsupported db_type {self.db_type!r}")

        if driver == "sqlite":
            return URL.create(driver, database=self.db_name).render_as_string(hide_password=False)

        return URL.create(
            driver,
            username=self.db_username,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        ).render_as_string(hide_password=False)


def get_settings() -> Settings:
    return Settings()
