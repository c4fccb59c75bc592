# taskstore/config.py
from pydantic_settings import BaseSettings
from typing import Optional
from pydantic import Field
from sqlalchemy.engine import URL

class Settings(BaseSettings):
    DB_HOST: str = Field("localhost")
    DB_PORT: int = Field(5433)
    DB_USER: str = Field("postgres")
    POSTGRES_PASSWORD: str = Field("")
    DB_NAME: str = Field("tasks")

    # Full URL override, e.g. sqlite+aiosqlite:///./test.db
    DATABASE_URL: Optional[str] = None

    DB_ECHO: bool = Field(False)
    DB_POOL_SIZE: int = Field(5)
    DB_CONNECT_TIMEOUT: int = Field(10)
    DB_CREATE_SCHEMA: bool = Field(False)

    model_config = {
        "env_file": ".env",
        "extra": "allow",
    }

    @property
    def database_url(self) -> str:
        """
        Returns the async connection URL:
          - DATABASE_URL when set (postgresql:// is switched to asyncpg)
          - otherwise assembled from the DB_* fields
        """
        if self.DATABASE_URL:
            db_url = self.DATABASE_URL
            if db_url.startswith("postgresql://"):
                db_url = db_url.replace("postgresql://", "postgresql+asyncpg://", 1)
            return db_url

        return URL.create(
            "postgresql+asyncpg",
            username=self.DB_USER,
            password=self.POSTGRES_PASSWORD or None,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        ).render_as_string(hide_password=False)

settings = Settings()
