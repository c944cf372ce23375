import os
import logging
from pydantic import BaseModel, Field
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()

class AISettings(BaseModel):
    openrouter_api_key: Optional[str] = Field(default=os.getenv("OPENROUTER_API_KEY"))
    model_name: str = Field(default=os.getenv("AI_MODEL_NAME", "google/gemini-2.0-flash-001"))
    kill_switch: bool = Field(default=os.getenv("AI_KILL_SWITCH", "false").lower() == "true")
    temperature: float = float(os.getenv("AI_TEMPERATURE", "0.4"))
    # 1 means a single attempt: failed model calls are never retried automatically.
    max_attempts: int = int(os.getenv("AI_MAX_ATTEMPTS", "1"))
    timeout_seconds: int = int(os.getenv("AI_TIMEOUT_SECONDS", "30"))

class Config(BaseModel):
    app_name: str = "Performance Review API"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./database.db")

    # Auth
    secret_key: str = os.getenv("SECRET_KEY", "dev-only-insecure-key-DO-NOT-USE-IN-PROD")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))
    invite_token_expire_hours: int = int(os.getenv("INVITE_TOKEN_EXPIRE_HOURS", str(24 * 7)))
    reset_token_expire_minutes: int = int(os.getenv("RESET_TOKEN_EXPIRE_MINUTES", "30"))

    # Base URL of the frontend, used to build invitation and password reset links
    app_url: str = os.getenv("APP_URL", "http://localhost:3000")

    # AI Components
    ai: AISettings = AISettings()

    version: str = "1.0.0"
    request_id_header: str = "X-Request-ID"

    # CORS: comma-separated origins loaded from env.
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv(
                "CORS_ORIGINS",
                "http://localhost:3000,http://127.0.0.1:3000",
            ).split(",")
            if o.strip()
        ]
    )

    # Rate limiting for the endpoints that call the model
    rate_limit_enabled: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    report_rate_limit: str = os.getenv("REPORT_RATE_LIMIT", "20/minute")

settings = Config()

# --- Startup Validation for Production ---
_logger = logging.getLogger(__name__)
if settings.environment not in ("development", "testing"):
    if "dev-only" in settings.secret_key:
        raise RuntimeError(
            "FATAL: SECRET_KEY must be set for non-development environments. "
            "Set it as an environment variable."
        )
elif "dev-only" in settings.secret_key:
    _logger.warning("⚠ Using insecure default SECRET_KEY, only acceptable in development.")
