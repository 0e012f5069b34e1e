"""
Core settings and environment variables for Semita.
Uses pydantic-settings for type-safe environment variable loading.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Create a .env file in the root directory to configure these.
    """
    
    # Application
    APP_NAME: str = "Semita Neighborhood Hub"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    
    # CORS - Frontend URLs allowed to access this API
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:5173"
    
    # Firebase/Firestore
    FIREBASE_PROJECT_ID: Optional[str] = None
    FIREBASE_CREDENTIALS_PATH: Optional[str] = None  # Path to service account JSON
    
    # Mock DB mode for local development without Firebase credentials.
    # An empty MOCK_DB_PATH keeps the mock store purely in memory.
    USE_MOCK_DB: bool = True
    MOCK_DB_PATH: str = "./mock_db.json"
    
    # Seed the five default services on startup when they are missing
    SEED_DEFAULT_SERVICES: bool = True
    
    # Polling interval advertised to the frontend for the notification badge
    NOTIFICATION_POLL_SECONDS: int = 60
    
    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]
    
    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"


# Global settings instance
settings = Settings()
