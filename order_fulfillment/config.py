"""
Configuration settings for Order Fulfillment Service
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings"""
    
    # Database
    DATABASE_URL: str = "sqlite:///./orders.db"
    
    # Service
    SERVICE_NAME: str = "order-fulfillment-service"
    SERVICE_PORT: int = 8000
    LOG_LEVEL: str = "INFO"
    
    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8080"
    ]
    
    # Reconciliation
    RECONCILE_ENABLED: bool = True
    RECONCILE_INTERVAL_SECONDS: float = 10.0
    
    # Retry Configuration (database connectivity on startup)
    MAX_RETRIES: int = 3
    RETRY_DELAY: int = 1
    
    class Config:
        env_file = ".env"
        case_sensitive = True


# Create global settings instance
settings = Settings()
