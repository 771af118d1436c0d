import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    APP_NAME = data.get("APP_NAME", "Cinema Ticketing API")
    APP_VERSION = data.get("APP_VERSION", "0.1.0")
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./cinema.db")
    CREATE_TABLES_ON_STARTUP = bool(data.get("CREATE_TABLES_ON_STARTUP", True))
    API_PREFIX = data.get("API_PREFIX", "/v1")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    JWT_EXPIRES_IN_SEC = int(data.get("JWT_EXPIRES_IN_SEC", 900))
    REFRESH_TOKEN_EXPIRES_DAYS = int(data.get("REFRESH_TOKEN_EXPIRES_DAYS", 7))
    USER_SESSION_EXPIRES_DAYS = int(data.get("USER_SESSION_EXPIRES_DAYS", 7))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 10))
    MIN_PASSWORD_LENGTH = int(data.get("MIN_PASSWORD_LENGTH", 8))
    MIN_USERNAME_LENGTH = int(data.get("MIN_USERNAME_LENGTH", 2))
    CACHE_BACKEND = data.get("CACHE_BACKEND", "memory")
    REDIS_URL = data.get("REDIS_URL", "redis://localhost:6379/0")
    CACHE_TTL_SEC = int(data.get("CACHE_TTL_SEC", 300))
    CACHE_MAX_ENTRIES = int(data.get("CACHE_MAX_ENTRIES", 1000))
    ENABLE_CACHE_TRACE_LOGS = bool(data.get("ENABLE_CACHE_TRACE_LOGS", False))
