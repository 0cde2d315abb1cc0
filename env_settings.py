from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    api_base_url: str = "http://localhost:3000"
    request_timeout_seconds: float = 10.0
    cookie_max_age_seconds: int = 60 * 60 * 24 * 7  # 7 days

    server_host: str = "127.0.0.1"
    server_port: int = 3000

    log_level: str = "INFO"
    log_json: bool = False


def get_env_or_die():
    settings = Settings()

    if not settings.api_base_url:
        raise ValueError("API base URL is not set")
    if settings.request_timeout_seconds <= 0:
        raise ValueError("Request timeout must be positive")
    if settings.cookie_max_age_seconds <= 0:
        raise ValueError("Cookie max age must be positive")

    return settings


ENV_SETTINGS = get_env_or_die()
