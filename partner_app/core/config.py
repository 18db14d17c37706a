from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env.local",
        extra="ignore"
    )

#  Order backend
    API_BASE_URL: str = "http://localhost:8000/api/v1"
    HTTP_TIMEOUT_SECONDS: float = 10.0

#  Local key-value storage
    REDIS_HOST: str = "redis://localhost:6379/0"
    ACCESS_TOKEN_KEY: str = "access_token"
    RESTAURANT_STORAGE_KEY: str = "restaurant-order-storage"
    DELIVERY_STORAGE_KEY: str = "delivery-order-storage"

#  Order rules
    MIN_PREP_TIME_MINUTES: int = 5
    MAX_PREP_TIME_MINUTES: int = 120
    DEFAULT_HISTORY_PAGE_SIZE: int = 20


    APP_NAME: str = "OneQlick Partner"
    DEBUG_MODE: bool = False
    LOG_FILE: str = "app.log"

settings = Settings()
