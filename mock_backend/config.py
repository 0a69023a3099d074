"""Runtime configuration for the mock backend, read from the environment."""
import os
from typing import NamedTuple


class Settings(NamedTuple):
    database_url: str
    jwt_secret: str
    token_minutes: int
    upload_dir: str
    seed_floor: int
    max_body_bytes: int
    log_level: str
    host: str
    port: int


def load_settings() -> Settings:
    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///./database.db"),
        jwt_secret=os.getenv("JWT_SECRET", "your_secret_key"),
        token_minutes=int(os.getenv("TOKEN_EXPIRE_MINUTES", "30")),
        upload_dir=os.getenv("UPLOAD_DIR", "uploads"),
        seed_floor=int(os.getenv("SEED_USER_FLOOR", "20")),
        max_body_bytes=int(os.getenv("MAX_BODY_BYTES", str(50 * 1024 * 1024))),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
    )


settings = load_settings()
