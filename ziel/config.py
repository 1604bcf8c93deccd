import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import EmailStr
from pydantic_settings import BaseSettings


BASEDIR = os.path.abspath('')
file_path = os.path.join(BASEDIR, '.env')


class Settings(BaseSettings):
    """Application configuration settings"""

    # Application
    app_name: str = "Ziel Classes API"
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Database
    mongodb_url: str = "mongodb://localhost:27017"
    database_name: str = "ziel"

    # Security
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 30
    jwt_cookie_expire_days: int = 30
    bcrypt_rounds: int = 12

    # Bootstrap admin, created on startup when both are set
    admin_email: Optional[EmailStr] = None
    admin_password: Optional[str] = None

    # CORS
    cors_origins: str = "*"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    load_dotenv(file_path)
    return Settings()
