"""
Configuration settings for the fleet selection service.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator, Field
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

class Settings(BaseSettings):
    """Application settings loaded from the environment and .env."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        validate_assignment=True,
        extra="ignore",
    )
    
    # Environment
    ENVIRONMENT: str = Field(default="development", description="Application environment")
    DEBUG: bool = Field(default=False, description="Debug mode")
    
    # API Settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Fleet Selection"
    
    # Database Settings - No default credentials
    DATABASE_URL: str = Field(..., description="Database connection URL")
    DB_ECHO: bool = Field(default=False, description="Echo SQL statements")
    
    # Pagination
    DEFAULT_PAGE_SIZE: int = Field(default=20, ge=1, le=500)
    MAX_PAGE_SIZE: int = Field(default=100, ge=1, le=1000)
    
    # Logging Settings
    LOG_LEVEL: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    LOG_FORMAT: str = Field(default="text", pattern="^(text|json)$")
    LOG_FILE: Optional[str] = None
    
    # Security Headers
    CORS_ORIGINS: List[str] = Field(default=["http://localhost:3000"], description="Allowed CORS origins")
    
    @field_validator('DATABASE_URL')
    @classmethod
    def validate_database_url(cls, v):
        if v.startswith('postgresql://'):
            return v.replace('postgresql://', 'postgresql+asyncpg://', 1)
        if not v.startswith(('postgresql+asyncpg://', 'sqlite+aiosqlite://')):
            raise ValueError("DATABASE_URL must be a PostgreSQL or SQLite (aiosqlite) URL")
        return v
    
    @field_validator('ENVIRONMENT')
    @classmethod
    def validate_environment(cls, v):
        allowed_envs = ['development', 'staging', 'production', 'test']
        if v not in allowed_envs:
            raise ValueError(f"ENVIRONMENT must be one of: {allowed_envs}")
        return v
    
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == "production"
    
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT == "development"

# Global settings instance with error handling
try:
    settings = Settings()
    if settings.is_production() and settings.DEBUG:
        logger.warning("DEBUG mode is enabled in production environment")
except Exception as e:
    logger.error(f"Failed to load settings: {e}")
    raise
