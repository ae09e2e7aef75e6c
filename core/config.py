"""
Configuration management using Pydantic Settings
Handles environment variables and validation
"""
from functools import lru_cache

from pydantic import ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Environment
    environment: str = Field(default="development")
    debug: bool = Field(default=False)

    # Application
    app_name: str = "Marketplace Exports"
    app_version: str = "0.1.0"

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")  # json or text

    # Report content
    report_brand: str = Field(default="Marketplace", description="Brand shown in report titles and footers")
    currency_code: str = Field(default="BDT")

    # Document rendering
    pdf_page_format: str = Field(default="A4")
    pdf_margin: str = Field(default="0.5in")
    pdf_landscape: bool = Field(default=False)
    pdf_device_scale_factor: float = Field(default=1.5, description="Raster scale used for crisp output")
    pdf_page_timeout_ms: int = Field(default=15000)

    # Monitoring
    prometheus_enabled: bool = Field(default=True)

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        allowed = ["development", "test", "staging", "production"]
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        if v not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v

    @field_validator("pdf_device_scale_factor")
    @classmethod
    def validate_scale(cls, v):
        if v < 1.5:
            raise ValueError("Device scale factor must be at least 1.5 for legible output")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
