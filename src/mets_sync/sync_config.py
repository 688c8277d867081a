# src/mets_sync/sync_config.py
import base64
import binascii
import json
import os
from dataclasses import dataclass, field, replace
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# The store secret. In CI it is set as a repository secret, usually base64-encoded.
CREDENTIALS_ENV = "MONGO_CREDENTIALS"
DEFAULT_DB_NAME = "mets_db"

METS_TEAM_ID = 121
DEFAULT_HASHTAG = "#LGM"
DEFAULT_TIMEZONE = "America/New_York"
ROSTER_STATUS = "Active (30-Man)"


class ConfigError(Exception):
    """Raised when settings or store credentials cannot be loaded."""


@dataclass(frozen=True)
class StoreCredentials:
    uri: str
    database: str = DEFAULT_DB_NAME


@dataclass(frozen=True)
class SyncConfig:
    """Everything the pipelines need, passed in explicitly instead of read from globals."""

    team_id: int = METS_TEAM_ID
    season: int = field(default_factory=lambda: datetime.now().year)
    hashtag: str = DEFAULT_HASHTAG
    social_limit: int = 25
    timezone: str = DEFAULT_TIMEZONE
    roster_status: str = ROSTER_STATUS
    http_timeout: float = 30.0
    roster_collection: str = "mets_squad"
    social_collection: str = "mets_social"

    @property
    def schedule_collection(self) -> str:
        return f"mets_schedule_{self.season}"

    def with_overrides(self, **overrides) -> "SyncConfig":
        """Returns a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e


def _env_timezone(name: str, default: str) -> str:
    zone = os.getenv(name) or default
    try:
        ZoneInfo(zone)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"{name} is not a known timezone: {zone!r}") from e
    return zone


def load_config() -> SyncConfig:
    """Builds the sync settings from environment variables, falling back to defaults."""
    return SyncConfig(
        team_id=_env_number("METS_TEAM_ID", METS_TEAM_ID, int),
        season=_env_number("METS_SEASON", datetime.now().year, int),
        hashtag=os.getenv("METS_HASHTAG") or DEFAULT_HASHTAG,
        social_limit=_env_number("METS_SOCIAL_LIMIT", 25, int),
        timezone=_env_timezone("METS_TIMEZONE", DEFAULT_TIMEZONE),
        http_timeout=_env_number("SYNC_HTTP_TIMEOUT", 30.0, float),
    )


def decode_credentials(raw: str) -> dict:
    """
    Parses the credentials secret, which may be plain JSON or base64-encoded JSON.
    The base64 form wins only when it decodes to something that looks like a JSON object.
    """
    text = raw.strip()
    try:
        # base64 tools wrap lines at 76 columns
        compact = "".join(text.split())
        decoded = base64.b64decode(compact, validate=True).decode("utf-8").strip()
    except (binascii.Error, UnicodeDecodeError):
        decoded = ""
    if decoded.startswith("{"):
        text = decoded

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{CREDENTIALS_ENV} is neither JSON nor base64-encoded JSON") from e
    if not isinstance(payload, dict):
        raise ConfigError(f"{CREDENTIALS_ENV} must hold a JSON object")
    return payload


def load_credentials(raw: str | None = None) -> StoreCredentials:
    """Reads the store credentials from the environment (or the given raw value)."""
    if raw is None:
        raw = os.getenv(CREDENTIALS_ENV)
    if not raw or not raw.strip():
        raise ConfigError(f"{CREDENTIALS_ENV} not found. Check your .env file or environment variables.")

    payload = decode_credentials(raw)
    uri = payload.get("uri")
    if not uri:
        raise ConfigError(f"{CREDENTIALS_ENV} is missing the 'uri' field")
    if not isinstance(uri, str):
        raise ConfigError(f"{CREDENTIALS_ENV} 'uri' must be a string")
    return StoreCredentials(uri=uri, database=payload.get("database") or DEFAULT_DB_NAME)
