from typing import List, Optional

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    LOG_LEVEL: str = "INFO"

    # database
    DATABASE_URL: Optional[str] = None
    POSTGRES_USER: str = "smartspend"
    POSTGRES_PASSWORD: str = "smartspend"
    POSTGRES_DB: str = "smartspend"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432

    @computed_field
    @property
    def SQLALCHEMY_DATABASE_URL(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    ALLOWED_ORIGINS: List[str] = ["http://localhost:5173"]

    # for jwt
    SECRET_KEY: str = "xxxxxxxxxxxxxxxxxxxxxxxxxxxxx"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # lookup cache
    REDIS_URL: Optional[str] = None
    CATEGORY_CACHE_TTL: int = 3600

    # csv uploads
    UPLOAD_DIR: str = "./uploads"
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024


settings = Settings()  # type: ignore
