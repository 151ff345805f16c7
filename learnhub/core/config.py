import os
from dotenv import load_dotenv
from typing import Optional, List

# Load .env file from the package directory (learnhub/.env), then from the working directory
dotenv_path = os.path.join(os.path.dirname(os.path.dirname(__file__)), '.env')
load_dotenv(dotenv_path)
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Settings:
    """
    Application settings read from the environment.

    Every attribute can be overridden by passing it as a keyword argument,
    e.g. Settings(DATABASE_URL="sqlite://") for an isolated in-memory app.
    """

    def __init__(self, **overrides):
        self.PROJECT_NAME: str = os.getenv("PROJECT_NAME", "LearnHub API")
        self.API_PREFIX: str = os.getenv("API_PREFIX", "/api")

        # Database
        self.DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./learnhub.db")

        # Cookie sessions
        self.SESSION_SECRET_KEY: str = os.getenv("SESSION_SECRET_KEY", "change-me-in-production")
        self.SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "learnhub_session")
        self.SESSION_MAX_AGE_SECONDS: int = int(os.getenv("SESSION_MAX_AGE_SECONDS", "86400"))
        self.SESSION_HTTPS_ONLY: bool = _env_bool("SESSION_HTTPS_ONLY", "false")

        # CORS
        self.CORS_ALLOWED_ORIGINS_STR: str = os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")

        # Logging
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

        # Uploads (buffered to local disk, served back under an authenticated path)
        self.UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "./uploads")
        self.UPLOAD_URL_PREFIX: str = os.getenv("UPLOAD_URL_PREFIX", "/uploads")
        self.MAX_UPLOAD_SIZE_BYTES: int = int(os.getenv("MAX_UPLOAD_SIZE_BYTES", str(50 * 1024 * 1024)))

        # Application settings
        self.APP_FRONTEND_URL: str = os.getenv("APP_FRONTEND_URL", "http://localhost:5173")

        # Referral & earnings (rates as decimals, e.g. "0.10" for 10%)
        self.REFERRAL_SIGNUP_BONUS: float = float(os.getenv("REFERRAL_SIGNUP_BONUS", "50.0"))
        self.REFERRAL_COMMISSION_RATE: float = float(os.getenv("REFERRAL_COMMISSION_RATE", "0.10"))
        self.PLATFORM_FEE_RATE: float = float(os.getenv("PLATFORM_FEE_RATE", "0.20"))

        # Admin bootstrap
        self.ADMIN_USERNAME: Optional[str] = os.getenv("ADMIN_USERNAME")
        self.ADMIN_PASSWORD: Optional[str] = os.getenv("ADMIN_PASSWORD")
        self.ALLOW_ADMIN_SIGNUP: bool = _env_bool("ALLOW_ADMIN_SIGNUP", "false")

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise AttributeError(f"Unknown setting: {key}")
            setattr(self, key, value)

    @property
    def CORS_ALLOWED_ORIGINS(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ALLOWED_ORIGINS_STR.split(',') if origin.strip()]


# Example usage:
# from learnhub.core.config import Settings
# settings = Settings()
# app = create_app(settings)
