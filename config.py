import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


def _setting(key, default=None):
    """env.yaml value, overridden by an environment variable of the same name"""
    return os.environ.get(key, data.get(key, default))


class ApplicationConfig:
    DB_URI = _setting("DB_URI", "sqlite+aiosqlite:///./test.db")
    API_PREFIX = _setting("API_PREFIX", "")
    API_PORT = int(_setting("API_PORT", 8000))
    API_HOST = _setting("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = _setting("LOG_LEVEL", "INFO")
    # Signing secrets have no default: TokenSettings refuses to build without them
    JWT_ACCESS_SECRET = _setting("JWT_ACCESS_SECRET")
    JWT_REFRESH_SECRET = _setting("JWT_REFRESH_SECRET")
    JWT_ISSUER = _setting("JWT_ISSUER", "session-auth-service")
    ACCESS_TOKEN_TTL_MINUTES = int(_setting("ACCESS_TOKEN_TTL_MINUTES", 15))
    REFRESH_TOKEN_TTL_DAYS = int(_setting("REFRESH_TOKEN_TTL_DAYS", 30))
    ROTATION_POLICY = _setting("ROTATION_POLICY", "rotating")
    STORE_TIMEOUT_SECONDS = float(_setting("STORE_TIMEOUT_SECONDS", 5.0))
    ACTIVITY_TOUCH_INTERVAL_SECONDS = int(_setting("ACTIVITY_TOUCH_INTERVAL_SECONDS", 0))
    SESSION_SWEEP_INTERVAL_SECONDS = int(_setting("SESSION_SWEEP_INTERVAL_SECONDS", 0))
    ADMIN_API_KEY = _setting("ADMIN_API_KEY")
