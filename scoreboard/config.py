import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 3000
    db_path: str = "./data/scores.db"
    db_timeout: float = 5.0
    cors_origins: tuple = ("*",)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls):
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            host=os.getenv("HOST", cls.host),
            port=int(os.getenv("PORT", cls.port)),
            db_path=os.getenv("DB_PATH", cls.db_path),
            db_timeout=float(os.getenv("DB_TIMEOUT", cls.db_timeout)),
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
        )
