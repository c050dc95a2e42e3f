"""Traffic domain configuration."""

from dataclasses import dataclass
from pathlib import Path

import config
from logger import logger

# Report slots
SUMMARY_SLOT = "summary"
SERVER_SLOT_PREFIX = "server:"

# Embed colours
COLOR_KILLED = 0xFF0000
COLOR_WARNING = 0xFFA500
COLOR_OK = 0x00FF00

REPORT_TITLE = "🌐 Hetzner Server Usage Report"

# Discord only bulk-deletes messages younger than 14 days
BULK_DELETE_MAX_AGE_DAYS = 14
HISTORY_BATCH_SIZE = 100

# Discord embed field value limit
FIELD_VALUE_LIMIT = 1024

OBFUSCATION_CHAR = "X"

BYTE_UNITS = ["B", "KB", "MB", "GB", "TB"]


@dataclass
class TrafficSettings:
    """Runtime settings for the traffic monitor."""
    channel_id: int
    api_tokens: list[str]
    threshold_notify: float = 50
    threshold_kill: float = 90
    send_always: bool = False
    obfuscate_names: bool = False
    per_server_embeds: bool = True
    display_unit: str | None = None
    clear_channel_on_startup: bool = True
    resume_summary_message: bool = True
    dry_run: bool = False
    refresh_minutes: float = 10
    cycle_timeout: float = 300
    api_url: str = "https://api.hetzner.cloud/v1"
    api_timeout: float = 30
    data_file: Path = Path("./data.json")
    seeded_message_id: int | None = None

    def __post_init__(self):
        if self.threshold_kill < self.threshold_notify:
            logger.warning(
                f"Kill threshold {self.threshold_kill}% is below notify threshold "
                f"{self.threshold_notify}% - raising kill threshold to match"
            )
            self.threshold_kill = self.threshold_notify


def _parse_id(value: str | None) -> int | None:
    if value is None or not value.strip():
        return None
    try:
        return int(value.strip())
    except ValueError:
        logger.warning(f"Ignoring non-numeric Discord id: {value!r}")
        return None


def load_settings() -> TrafficSettings:
    """Build settings from the global environment config.

    Raises:
        ValueError: If the channel id is missing or not numeric
    """
    for name in config.INVALID_SETTINGS:
        logger.warning(f"Invalid numeric value for {name}, using default")

    channel_id = _parse_id(config.CHANNEL_ID)
    if channel_id is None:
        raise ValueError("CHANNEL_ID must be set to a numeric Discord channel id")

    unit = (config.TRAFFIC_DISPLAY_UNIT or "auto").strip().upper()
    if unit != "AUTO" and unit not in BYTE_UNITS:
        logger.warning(
            f"Unknown TRAFFIC_DISPLAY_UNIT {config.TRAFFIC_DISPLAY_UNIT!r}, "
            f"expected auto or one of {', '.join(BYTE_UNITS)} - using auto"
        )
        unit = "AUTO"

    return TrafficSettings(
        channel_id=channel_id,
        api_tokens=list(config.HETZNER_API_TOKENS),
        threshold_notify=config.THRESHOLD_PERCENT_NOTIF,
        threshold_kill=config.THRESHOLD_PERCENT_KILL,
        send_always=config.SEND_USAGE_NOTIF_ALWAYS,
        obfuscate_names=config.OBFUSCATE_SERVER_NAMES,
        per_server_embeds=config.PER_SERVER_EMBEDS,
        display_unit=None if unit == "AUTO" else unit,
        clear_channel_on_startup=config.CLEAR_CHANNEL_ON_STARTUP,
        resume_summary_message=config.RESUME_SUMMARY_MESSAGE,
        dry_run=config.DRY_RUN,
        refresh_minutes=config.REFRESH_TIME_IN_MINUTES,
        cycle_timeout=config.CYCLE_TIMEOUT_SECONDS,
        api_url=config.HETZNER_API_URL,
        api_timeout=config.HETZNER_TIMEOUT_SECONDS,
        data_file=config.DATA_FILE,
        seeded_message_id=_parse_id(config.MESSAGE_ID),
    )
