from pydantic_settings import BaseSettings
from pathlib import Path
from typing import List, Literal

# Get the project root directory (parent of the package folder)
PROJECT_ROOT = Path(__file__).parent.parent

class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""
    database_url: str = f"sqlite:///{PROJECT_ROOT / 'activities.db'}"
    
    # IANA zone used to read "now" (empty = system local time)
    timezone: str = ""
    
    # Suggestion settings
    suggestion_limit: int = 10
    active_context_source: Literal["engine", "store"] = "engine"
    
    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    
    # HTTP
    cors_origins: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    
    class Config:
        env_file = str(PROJECT_ROOT / ".env")
        extra = "ignore"

settings = Settings()
