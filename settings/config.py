"""Конфигурация приложения из env переменных"""
from pathlib import Path

from environs import Env


# Load environment variables
env = Env()

STAND = env.str('STAND', default='local')
BASE_PATH = Path.cwd().absolute()

if STAND == 'local':
    env.read_env(path=str(BASE_PATH / '.env'))

class Settings:
    def __init__(self):
        self.PORT: int = env.int('PORT', default=8008)

        # App
        self.DEBUG: bool = env.bool("DEBUG", True)
        self.CORS_ORIGINS: list = env.list("CORS_ORIGINS", ["*"])

        # External IMC backend (calculation + history)
        self.IMC_BACKEND_URL: str = env.str("IMC_BACKEND_URL", "http://localhost:3000").rstrip("/")
        self.IMC_BACKEND_TIMEOUT: float = env.float("IMC_BACKEND_TIMEOUT", 30.0)
        self.HISTORY_CACHE_TTL_SECONDS: int = env.int("HISTORY_CACHE_TTL_SECONDS", default=10)

        # Calendar dates of history records are taken in this zone
        self.REFERENCE_TIMEZONE: str = env.str("REFERENCE_TIMEZONE", "America/Argentina/Buenos_Aires")

        # SENTRY
        self.SENTRY_DSN: str = env.str("SENTRY_DSN", "")

AppConfig = Settings()
