# src/config/settings.py

"""Central configuration for the EMMSA price tracker."""

import os
from dataclasses import dataclass
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

from src.errors import ConfigError

load_dotenv()


class Settings:
    """Central configuration for the EMMSA price tracker."""

    # --- Requests ---
    REQUEST_TIMEOUT: int = 30           # Seconds before a request times out

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "safari17_0"

    # --- EMMSA (provider contract, reproduced verbatim) ---
    EMMSA_ORIGIN: str = "https://old.emmsa.com.pe"
    EMMSA_API_URL: str = (
        "https://old.emmsa.com.pe/emmsa_spv/app/reportes/ajax/"
        "rpt07_gettable_new_web.php"
    )
    EMMSA_REFERER: str = (
        "https://old.emmsa.com.pe/emmsa_spv/rpEstadistica/"
        "rpt_precios-diarios-web.php"
    )
    EMMSA_HEADERS: dict[str, str] = {
        "Content-Type": (
            "application/x-www-form-urlencoded; charset=UTF-8"
        ),
        "Accept": "text/html, */*; q=0.01",
        "Accept-Language": "en-GB,en-US;q=0.9,en;q=0.8",
        "Origin": EMMSA_ORIGIN,
        "Referer": EMMSA_REFERER,
        "User-Agent": (
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
            "AppleWebKit/605.1.15 (KHTML, like Gecko) "
            "Version/18.5 Safari/605.1.15"
        ),
    }
    # vid_tipo=1 is "precios diarios"; empty product/variety means all
    EMMSA_FORM_DEFAULTS: dict[str, str] = {
        "vid_tipo": "1",
        "vprod": "",
        "vvari": "",
    }
    EMMSA_DATE_FORMAT: str = "%d/%m/%Y"

    # --- Pantry ---
    PANTRY_BASE_URL: str = "https://getpantry.cloud/apiv1/pantry"
    PANTRY_API_KEY_ENV: str = "PANTRY_API_KEY"
    BASKET_PREFIX: str = "prices"

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"


@dataclass(frozen=True)
class StoreConfig:
    """Credentials for the Pantry basket store."""

    api_key: str

    def __repr__(self) -> str:
        return "StoreConfig(api_key='***')"

    @classmethod
    def from_env(cls) -> "StoreConfig":
        """Load the Pantry API key from the environment.

        Raises:
            ConfigError: If ``PANTRY_API_KEY`` is unset or blank.
        """
        env_name = Settings.PANTRY_API_KEY_ENV
        api_key = os.environ.get(env_name, "").strip()
        if not api_key:
            raise ConfigError(
                f"{env_name} environment variable not set"
            )
        return cls(api_key=api_key)
