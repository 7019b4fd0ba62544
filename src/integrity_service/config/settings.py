"""
Integrity Service Settings

Configuration management using Pydantic settings with environment variable support.
"""

from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Integrity Service configuration"""

    # Service Configuration
    service_name: str = Field(default="fm-integrity-service", description="Service name")
    environment: str = Field(default="development", description="Environment (development, production)")
    port: int = Field(default=8005, description="Service port")
    host: str = Field(default="0.0.0.0", description="Service host")

    # Database Configuration
    database_url: str = Field(
        default="sqlite+aiosqlite:///./integrity.db",
        description="Database connection URL"
    )

    # Upload Limits
    # NOTE: limits are enforced by the HTTP layer; the integrity workflow
    # accepts payloads that were already validated
    max_file_size_mb: int = Field(default=50, description="Maximum file size in MB")
    allowed_content_types: str = Field(
        default=(
            "application/pdf,image/jpeg,image/png,image/gif,text/plain,"
            "application/msword,"
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document,"
            "application/vnd.ms-excel,"
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        ),
        description="Allowed MIME types (comma-separated)"
    )

    # Integrity Configuration
    default_algorithm: str = Field(
        default="sha256",
        description="Digest algorithm used for new uploads (md5, sha1, sha256, sha512)"
    )

    # Audit Trail
    default_audit_limit: int = Field(default=100, description="Default audit query size")
    max_audit_limit: int = Field(
        default=1000,
        ge=1,
        le=1000,
        description="Maximum audit query size (bounds the /audit/logs limit parameter)"
    )
    stats_window: int = Field(
        default=1000,
        description="Number of most recent audit events reduced by stats/timeline"
    )
    default_timeline_days: int = Field(default=7, description="Default timeline window in days")

    # NOTE: STORAGE_PROVIDER is read directly by factory.py via os.getenv()
    # This allows the factory to be independent of service settings

    # CORS Configuration
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8090"],
        description="Allowed CORS origins"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def max_file_size_bytes(self) -> int:
        """Convert max file size from MB to bytes"""
        return self.max_file_size_mb * 1024 * 1024

    @property
    def allowed_types(self) -> List[str]:
        """Parse allowed content types into list"""
        return [ct.strip() for ct in self.allowed_content_types.split(",") if ct.strip()]


# Global settings instance
settings = Settings()
