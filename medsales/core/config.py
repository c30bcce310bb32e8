import os

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    # Application Settings
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DEBUG: bool = os.getenv("DEBUG", "0") == "1"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    APP_VERSION: str = "1.0.0"

    # API Settings
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", 8000))
    API_PREFIX: str = os.getenv("API_PREFIX", "/api")
    ALLOWED_ORIGINS: str = os.getenv(
        "ALLOWED_ORIGINS", "http://localhost:5173,https://your-domain.com"
    )
    WORKERS_COUNT: int = int(os.getenv("WORKERS_COUNT", 2))

    # Database Settings
    POSTGRES_HOST: str = os.getenv("POSTGRES_HOST", "localhost")
    POSTGRES_PORT: int = int(os.getenv("POSTGRES_PORT", 5432))
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "medsales")
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "medsales_user")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "m3ds4l3s")
    DATABASE_URI: str = os.getenv(
        "DATABASE_URI",
        f"postgresql+psycopg://{POSTGRES_USER}:{POSTGRES_PASSWORD}@{POSTGRES_HOST}:{POSTGRES_PORT}/{POSTGRES_DB}",
    )

    # Token Settings
    SECRET_KEY: str = os.getenv("SECRET_KEY", "your-secret-key")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(
        os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 24 * 60)
    )

    # Bootstrap admin account, stored hashed on startup
    ADMIN_USERNAME: str = os.getenv("ADMIN_USERNAME", "admin")
    ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "")

    # Cloudinary Settings
    CLOUDINARY_CLOUD_NAME: str = os.getenv("CLOUDINARY_CLOUD_NAME", "")
    CLOUDINARY_API_KEY: str = os.getenv("CLOUDINARY_API_KEY", "")
    CLOUDINARY_API_SECRET: str = os.getenv("CLOUDINARY_API_SECRET", "")
    CLOUDINARY_SECURE: bool = os.getenv("CLOUDINARY_SECURE", "true").lower() == "true"
    CLOUDINARY_FOLDER: str = os.getenv("CLOUDINARY_FOLDER", "uploads")

    # Upload Settings
    UPLOAD_MAX_SIZE: int = int(os.getenv("UPLOAD_MAX_SIZE", 5 * 1024 * 1024))
    UPLOAD_URL_EXPIRES_IN: int = int(os.getenv("UPLOAD_URL_EXPIRES_IN", 3600))

    # Pagination Settings
    DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE", 20))
    MAX_PAGE_SIZE: int = 100

    @field_validator("ALLOWED_ORIGINS")
    @classmethod
    def validate_allowed_origins(cls, v: str) -> list[str]:
        if isinstance(v, str):
            return [url.strip() for url in v.split(",")]
        return ["*"]

    class Config:
        case_sensitive = True
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


settings = Settings()
