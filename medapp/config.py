"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL
from typing import List, Optional, Union


class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.

    Attributes:
        mysql_host: MySQL server hostname
        mysql_user: MySQL user
        mysql_password: MySQL password
        mysql_port: MySQL port
        mysql_database: Name of the MySQL database
        database_url: Optional full SQLAlchemy URL, overrides the MYSQL_* values
        db_pool_size: Number of pooled connections kept open
        db_max_overflow: Extra connections allowed beyond the pool size
        create_tables: Whether to create missing tables on startup

        # Client settings
        api_base_url: Base URL of the backend used by the registration client

        port: Port the API listens on
        cors_origins: Comma-separated origins allowed to call the API from a browser
        log_level: Root logging level
    """
    # Database settings
    mysql_host: str = "localhost"
    mysql_user: str = "root"
    mysql_password: str = ""
    mysql_port: int = 3306
    mysql_database: str = "medapp"
    database_url: Optional[str] = None
    db_pool_size: int = 5
    db_max_overflow: int = 10
    create_tables: bool = True

    # Client settings
    api_base_url: str = "http://localhost:3001"

    port: int = 3001
    cors_origins: str = "http://localhost:3000"
    log_level: str = "INFO"

    class Config:
        """Configuration for environment variables loading"""
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    @property
    def cors_origin_list(self) -> List[str]:
        """CORS_ORIGINS split on commas, blanks dropped."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def sqlalchemy_url(self) -> Union[str, URL]:
        """
        Connection URL for the configured database.

        DATABASE_URL wins when set; otherwise the MYSQL_* values are combined
        into a PyMySQL URL.
        """
        if self.database_url:
            return self.database_url
        return URL.create(
            "mysql+pymysql",
            username=self.mysql_user,
            password=self.mysql_password or None,
            host=self.mysql_host,
            port=self.mysql_port,
            database=self.mysql_database,
        )


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
