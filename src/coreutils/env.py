from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv
import os

load_dotenv()  # take environment variables from .env

KEEPA_DEFAULT_DOMAIN = 5  # Amazon.co.jp


def env_get(key: str, default: str | None = None) -> str | None:
    """Get environment variable or return default."""
    return os.getenv(key, default)


@dataclass
class Settings:
    """Runtime configuration for the image sheet pipeline"""

    keepa_api_key: Optional[str] = None
    keepa_domain: int = KEEPA_DEFAULT_DOMAIN
    keepa_timeout: Optional[float] = None
    credentials_file: Optional[str] = None
    sheet_id: Optional[str] = None
    worksheet: Optional[str] = None
    output_dir: str = "output"

    def require_api_key(self) -> str:
        if not self.keepa_api_key:
            raise ValueError("KEEPA_API_KEY environment variable is not set")
        return self.keepa_api_key


def load_settings() -> Settings:
    """Build Settings from the environment (and .env)."""
    timeout = env_get("KEEPA_TIMEOUT")

    return Settings(
        keepa_api_key=env_get("KEEPA_API_KEY"),
        keepa_domain=int(env_get("KEEPA_DOMAIN", str(KEEPA_DEFAULT_DOMAIN))),
        keepa_timeout=float(timeout) if timeout else None,
        credentials_file=env_get("GOOGLE_APPLICATION_CREDENTIALS"),
        sheet_id=env_get("KEEPA_SHEET_ID"),
        worksheet=env_get("KEEPA_WORKSHEET"),
        output_dir=env_get("KEEPA_OUTPUT_DIR", "output"),
    )
