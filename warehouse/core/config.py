from typing import Optional
from urllib.parse import quote_plus
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: Optional[str] = None

    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_NAME: str = "warehouse"
    DB_SCHEMA: str = "warehouse"
    DB_SSLMODE: str = "disable"

    SQL_ECHO: bool = False
    LOG_DIR: str = "logs"

    class Config:
        env_file = ".env"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        credentials = quote_plus(self.DB_USER)
        if self.DB_PASSWORD:
            credentials = f"{credentials}:{quote_plus(self.DB_PASSWORD)}"
        return (
            f"postgresql+asyncpg://{credentials}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
            f"?sslmode={self.DB_SSLMODE}&search_path={self.DB_SCHEMA}"
        )

settings = Settings()
