from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine.url import URL, make_url


class Settings(BaseSettings):
    db_host: str = Field(default="localhost")
    db_name: str = Field(default="test")
    db_user: str = Field(default="root")
    db_pass: str = Field(default="")
    # Full SQLAlchemy URL; takes precedence over the DB_* parts when set.
    database_url: Optional[str] = Field(default=None)

    app_name: str = "Users"
    app_host: str = "127.0.0.1"
    app_port: int = 8000
    log_level: str = "INFO"
    sql_echo: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def dsn(self) -> str:
        """Connection string without credentials, built from host and database name."""
        return "mysql+pymysql://{host}/{name}?charset=utf8mb4".format(
            host=self.db_host or "localhost",
            name=self.db_name or "test",
        )

    def username(self) -> str:
        return self.db_user or "root"

    def password(self) -> str:
        return self.db_pass or ""

    def sqlalchemy_url(self) -> URL:
        if self.database_url:
            return make_url(self.database_url)
        return make_url(self.dsn()).set(
            username=self.username(),
            password=self.password(),
        )
