from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    PRODUCTS_FILE: str = "assets/products.json"
    ERROR_LOG_FILE: str = "error.log"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 3000
    FRONTEND_ORIGINS: List[str] = ["http://localhost:4200"]
    LOG_LEVEL: str = "INFO"
    API_URL: str = "http://127.0.0.1:3000"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
