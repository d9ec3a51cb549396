"""
Configuration and settings for the CMS backend.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}

DEV_ORIGINS = (
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:3001",
    "http://127.0.0.1:3001",
    "http://localhost:5000",
    "http://127.0.0.1:5000",
)


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    api_prefix: str = Field(default="/api", alias="API_PREFIX")
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("NODE_ENV", "ENVIRONMENT", "environment"),
    )
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    port: int = Field(default=5000, alias="PORT")

    # MongoDB. Hosting platforms expose the URI under different names.
    mongodb_uri: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "MONGODB_URI",
            "DATABASE_URL",
            "MONGO_URL",
            "MONGODB_CONNECTION_STRING",
            "mongodb_uri",
        ),
    )
    mongodb_db_name: str = Field(default="dentist_website", alias="MONGODB_DB_NAME")
    mongodb_server_selection_timeout_ms: int = Field(
        default=5000, alias="MONGODB_SERVER_SELECTION_TIMEOUT_MS"
    )
    mongodb_connect_timeout_ms: int = Field(
        default=10000, alias="MONGODB_CONNECT_TIMEOUT_MS"
    )
    mongodb_socket_timeout_ms: int = Field(
        default=45000, alias="MONGODB_SOCKET_TIMEOUT_MS"
    )
    mongodb_max_pool_size: int = Field(default=1, alias="MONGODB_MAX_POOL_SIZE")

    # Auth
    jwt_secret: Optional[str] = Field(default=None, alias="JWT_SECRET")
    jwt_expire: str = Field(default="7d", alias="JWT_EXPIRE")
    admin_email: Optional[str] = Field(default=None, alias="ADMIN_EMAIL")
    admin_password: Optional[str] = Field(default=None, alias="ADMIN_PASSWORD")
    admin_username: str = Field(default="admin", alias="ADMIN_USERNAME")

    # Cloudinary
    cloudinary_cloud_name: Optional[str] = Field(
        default=None, alias="CLOUDINARY_CLOUD_NAME"
    )
    cloudinary_api_key: Optional[str] = Field(default=None, alias="CLOUDINARY_API_KEY")
    cloudinary_api_secret: Optional[str] = Field(
        default=None, alias="CLOUDINARY_API_SECRET"
    )
    media_root_folder: Optional[str] = Field(
        default=None, alias="CLOUDINARY_ROOT_FOLDER"
    )

    # CORS
    frontend_url: str = Field(default="http://localhost:3000", alias="FRONTEND_URL")
    allowed_origins: Optional[str] = Field(default=None, alias="ALLOWED_ORIGINS")

    # Development toggles
    use_in_memory_backends: bool = Field(
        default=False, alias="CMS_USE_IN_MEMORY_BACKENDS"
    )

    @property
    def is_development(self) -> bool:
        return self.environment.strip().lower() in {"development", "dev", "local", ""}

    @property
    def allowed_origins_list(self) -> list[str]:
        if self.allowed_origins:
            origins: list[str] = []
            for origin in self.allowed_origins.split(","):
                normalized_origin = origin.strip().rstrip("/")
                if normalized_origin:
                    origins.append(normalized_origin)
            return origins
        if self.is_development:
            return ["*"]
        origins = [self.frontend_url.rstrip("/")]
        origins.extend(origin for origin in DEV_ORIGINS if origin not in origins)
        return origins

    @property
    def jwt_expire_seconds(self) -> int:
        match = _DURATION_RE.match(self.jwt_expire or "")
        if not match:
            raise ValueError(f"JWT_EXPIRE must look like '7d', '12h' or '3600', got {self.jwt_expire!r}")
        amount, unit = match.groups()
        return int(amount) * _DURATION_UNITS[unit]

    @property
    def mongodb_uri_masked(self) -> str:
        if not self.mongodb_uri:
            return "NOT SET"
        return re.sub(r":[^:@/]*@", ":***@", self.mongodb_uri)

    @property
    def cloudinary_configured(self) -> bool:
        return bool(
            self.cloudinary_cloud_name
            and self.cloudinary_api_key
            and self.cloudinary_api_secret
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
