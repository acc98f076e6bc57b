from pathlib import Path
from typing import List

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding='utf-8',
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'LINE Booking'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # API server (granian)
    API_HOST: str = '0.0.0.0'
    API_PORT: int = 8100
    API_WORKERS: int = 1

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = ['*']

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',')]
        elif isinstance(v, list):
            return v
        return []

    # Kvrocks Configuration (Redis protocol + Kvrocks storage)
    KVROCKS_HOST: str = 'localhost'
    KVROCKS_PORT: int = 6666
    KVROCKS_DB: int = 0
    KVROCKS_PASSWORD: str = ''
    KVROCKS_CLUSTER_MODE: bool = False
    KVROCKS_CLUSTER_NODES: str = ''  # "host1:port1,host2:port2"
    REDIS_DECODE_RESPONSES: bool = True

    # Kvrocks Connection Pool Configuration
    KVROCKS_POOL_MAX_CONNECTIONS: int = 50
    KVROCKS_POOL_SOCKET_TIMEOUT: int = 10  # Socket read/write timeout (seconds)
    KVROCKS_POOL_SOCKET_CONNECT_TIMEOUT: int = 10  # Connection timeout (seconds)
    KVROCKS_POOL_SOCKET_KEEPALIVE: bool = True
    KVROCKS_POOL_HEALTH_CHECK_INTERVAL: int = 30  # seconds
    KVROCKS_SCAN_COUNT: int = 500  # SCAN batch hint when listing keys

    # Booking
    BOOKING_TIMEZONE: str = 'Asia/Tokyo'  # Local time of the fixed daily schedule
    RESERVATION_TTL_SECONDS: int = 60 * 60 * 24 * 7  # 7 days retention
    DEFAULT_RESERVATION_SOURCE: str = 'web'
    # Channels reported as their own metric label; anything else counts as 'other'
    METRIC_RESERVATION_SOURCES: List[str] = ['web', 'line', 'liff', 'admin']
    DEFAULT_GUEST_NAME: str = 'ゲスト'

    # LINE Notify
    LINE_NOTIFY_ENDPOINT: str = 'https://notify-api.line.me/api/notify'
    LINE_NOTIFY_TOKEN: SecretStr = SecretStr('')
    LINE_NOTIFY_TIMEOUT_SECONDS: float = 10.0

    @field_validator('DEFAULT_RESERVATION_SOURCE', 'DEFAULT_GUEST_NAME', mode='after')
    @classmethod
    def strip_defaults(cls, v: str) -> str:
        return (v or '').strip()


settings = Settings()  # type: ignore
