"""Run configuration: target companies, paths and pacing."""
import json
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Top 20 publicly traded Alberta oil & gas companies
DEFAULT_COMPANIES: List[str] = [
    "Enbridge",
    "Canadian Natural Resources",
    "Suncor Energy",
    "TC Energy",
    "Cenovus Energy",
    "Imperial Oil",
    "Pembina Pipeline",
    "Tourmaline Oil",
    "ARC Resources",
    "MEG Energy",
    "Whitecap Resources",
    "Strathcona Resources",
    "Keyera",
    "Gibson Energy",
    "Vermilion Energy",
    "Baytex Energy",
    "Paramount Resources",
    "Peyto Exploration & Development",
    "Athabasca Oil",
    "NuVista Energy",
]


class Settings(BaseSettings):
    """Scraper settings. Environment variables use the ``GLASSDOOR_`` prefix."""

    model_config = SettingsConfigDict(
        env_prefix="GLASSDOOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    companies: List[str] = Field(default_factory=lambda: list(DEFAULT_COMPANIES))
    base_url: str = "https://www.glassdoor.ca"
    output_file: Path = Path("glassdoor_data.json")
    debug_dir: Path = Path("debug_images")
    user_data_dir: Path = Path("glassdoor_auth")

    max_pages: int = Field(30, ge=1)
    headless: bool = False
    navigation_timeout_ms: int = Field(60000, ge=1000)
    captcha_wait_ms: int = Field(30000, ge=0)
    login_timeout_ms: int = Field(120000, ge=0)

    # (low, high) jitter windows in milliseconds
    page_delay_ms: Tuple[int, int] = (3000, 5000)
    next_delay_ms: Tuple[int, int] = (4000, 7000)
    search_delay_ms: Tuple[int, int] = (2000, 3000)

    @field_validator("companies")
    @classmethod
    def _clean_companies(cls, v: List[str]) -> List[str]:
        cleaned = []
        for name in v:
            name = name.strip()
            if name and name not in cleaned:
                cleaned.append(name)
        if not cleaned:
            raise ValueError("companies must contain at least one name")
        return cleaned

    @field_validator("base_url")
    @classmethod
    def _strip_base_url(cls, v: str) -> str:
        return v.rstrip("/")

    @model_validator(mode="after")
    def _check_delay_windows(self) -> "Settings":
        for name in ("page_delay_ms", "next_delay_ms", "search_delay_ms"):
            low, high = getattr(self, name)
            if low < 0 or high < low:
                raise ValueError(f"{name} must be a (low, high) pair with 0 <= low <= high")
        return self


def read_companies_file(path: Path) -> List[str]:
    names = []
    for line in Path(path).read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        names.append(line)
    return names


def load_settings(config_file: Optional[Path] = None, **overrides) -> Settings:
    """Build settings from env/.env, then a JSON config file, then explicit overrides.

    Overrides whose value is ``None`` are ignored so CLI options can be passed through as-is.
    """
    values = {}
    if config_file is not None:
        values.update(json.loads(Path(config_file).read_text(encoding="utf-8")))
    values.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**values)
