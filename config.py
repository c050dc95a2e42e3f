"""Global configuration for Hetzner Traffic Guard."""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _get_number(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        # Logger isn't configured yet, so invalid values are reported later
        INVALID_SETTINGS.append(name)
        return default


INVALID_SETTINGS: list[str] = []

# Discord
DISCORD_TOKEN = os.getenv("DISCORD_TOKEN")
CHANNEL_ID = os.getenv("CHANNEL_ID")
MESSAGE_ID = os.getenv("MESSAGE_ID")

# Hetzner - one or more project tokens, comma-separated
HETZNER_API_TOKENS = [
    t.strip() for t in os.getenv("HETZNER_API_TOKEN", "").split(",") if t.strip()
]
HETZNER_API_URL = os.getenv("HETZNER_API_URL", "https://api.hetzner.cloud/v1")
HETZNER_TIMEOUT_SECONDS = _get_number("HETZNER_TIMEOUT_SECONDS", 30)

# Thresholds (percent of included traffic)
THRESHOLD_PERCENT_NOTIF = _get_number("THRESHOLD_PERCENT_NOTIF", 50)
THRESHOLD_PERCENT_KILL = _get_number("THRESHOLD_PERCENT_KILL", 90)

# Reporting
SEND_USAGE_NOTIF_ALWAYS = _get_bool("SEND_USAGE_NOTIF_ALWAYS", False)
OBFUSCATE_SERVER_NAMES = _get_bool("OBFUSCATE_SERVER_NAMES_FROM_CONSOLE_LOG", False)
PER_SERVER_EMBEDS = _get_bool("PER_SERVER_EMBEDS", True)
TRAFFIC_DISPLAY_UNIT = os.getenv("TRAFFIC_DISPLAY_UNIT", "auto")

# Startup behaviour
CLEAR_CHANNEL_ON_STARTUP = _get_bool("CLEAR_CHANNEL_ON_STARTUP", True)
RESUME_SUMMARY_MESSAGE = _get_bool("RESUME_SUMMARY_MESSAGE", True)

# Actions
DRY_RUN = _get_bool("DRY_RUN", False)

# Scheduling
REFRESH_TIME_IN_MINUTES = _get_number("REFRESH_TIME_IN_MINUTES", 10)
CYCLE_TIMEOUT_SECONDS = _get_number("CYCLE_TIMEOUT_SECONDS", 300)

# Persisted summary message pointer
DATA_FILE = Path(os.getenv("DATA_FILE", "./data.json"))

# Logging
LOG_DIR = Path(os.getenv("LOG_DIR", "./logs"))
LOG_DIR.mkdir(parents=True, exist_ok=True)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
# discord.py and APScheduler are chatty at INFO
LIBRARY_LOG_LEVEL = os.getenv("LIBRARY_LOG_LEVEL", "WARNING").upper()
