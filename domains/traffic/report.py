"""Discord embeds for the traffic usage report."""

from dataclasses import dataclass, field

import discord

from .actions import ActionResult
from .config import (
    COLOR_KILLED,
    COLOR_OK,
    COLOR_WARNING,
    FIELD_VALUE_LIMIT,
    REPORT_TITLE,
    SERVER_SLOT_PREFIX,
)
from .usage import Bucket, UsageRecord, format_bytes, obfuscate_name

BUCKET_COLORS = {
    Bucket.KILL: COLOR_KILLED,
    Bucket.NOTIFY: COLOR_WARNING,
    Bucket.OK: COLOR_OK,
}


@dataclass
class Report:
    """Everything to post for one cycle."""
    summary: discord.Embed | None = None
    killed: list[UsageRecord] = field(default_factory=list)
    high_usage: list[UsageRecord] = field(default_factory=list)
    server_embeds: list[tuple[str, discord.Embed]] = field(default_factory=list)


def server_slot(record: UsageRecord) -> str:
    return f"{SERVER_SLOT_PREFIX}{record.id}"


def _traffic(record: UsageRecord, unit: str | None) -> str:
    return f"{format_bytes(record.outgoing_bytes, unit)} / {format_bytes(record.included_bytes, unit)}"


def _usage_line(record: UsageRecord, obfuscate: bool, unit: str | None) -> str:
    name = obfuscate_name(record.name, obfuscate)
    return f"**{name}**: {record.usage_percent:.2f}% ({_traffic(record, unit)})"


def _join_lines(lines: list[str], limit: int = FIELD_VALUE_LIMIT) -> str:
    """Join lines, collapsing whatever doesn't fit into a trailing count."""
    kept = []
    used = 0
    for i, line in enumerate(lines):
        remaining = len(lines) - i - 1
        suffix = f"\n…and {remaining} more" if remaining else ""
        if used + len(line) + len(suffix) + (1 if kept else 0) > limit:
            kept.append(f"…and {len(lines) - i} more")
            break
        kept.append(line)
        used += len(line) + 1
    return "\n".join(kept)


def build_summary_embed(
    killed: list[UsageRecord],
    high_usage: list[UsageRecord],
    obfuscate: bool = False,
    unit: str | None = None,
) -> discord.Embed:
    """Summary of killed and high-usage servers."""
    color = COLOR_KILLED if killed else COLOR_WARNING if high_usage else COLOR_OK
    embed = discord.Embed(title=REPORT_TITLE, color=color, timestamp=discord.utils.utcnow())

    if killed:
        embed.add_field(
            name="🚨 Servers Killed",
            value=_join_lines([_usage_line(r, obfuscate, unit) for r in killed]),
            inline=False,
        )

    if high_usage:
        embed.add_field(
            name="⚠️ High Usage Servers" if killed else "⚠️ Servers Over Threshold",
            value=_join_lines([_usage_line(r, obfuscate, unit) for r in high_usage]),
            inline=False,
        )

    return embed


def build_all_clear_embed(server_count: int) -> discord.Embed:
    """Status embed when nothing is over the notify threshold."""
    return discord.Embed(
        title=REPORT_TITLE,
        description=f"✅ All {server_count} servers are within usage limits.",
        color=COLOR_OK,
        timestamp=discord.utils.utcnow(),
    )


def build_server_embed(record: UsageRecord, obfuscate: bool = False, unit: str | None = None) -> discord.Embed:
    """Per-server detail card."""
    embed = discord.Embed(
        title=f"🖥️ {obfuscate_name(record.name, obfuscate)}",
        color=BUCKET_COLORS[record.bucket],
        timestamp=discord.utils.utcnow(),
    )
    embed.add_field(name="Status", value=record.status, inline=True)
    embed.add_field(name="Usage", value=f"{record.usage_percent:.2f}%", inline=True)
    embed.add_field(name="Traffic", value=_traffic(record, unit), inline=True)
    return embed


def compose(
    records: list[UsageRecord],
    results: list[ActionResult],
    *,
    send_always: bool = False,
    per_server: bool = False,
    obfuscate: bool = False,
    unit: str | None = None,
) -> Report:
    """Build the embeds for one cycle.

    Servers whose shutdown failed stay in the high-usage section so they
    are still visible until a later cycle kills them.
    """
    killed_ids = {result.record.id for result in results if result.succeeded}
    killed = [r for r in records if r.id in killed_ids]
    high_usage = [
        r for r in records
        if r.bucket is not Bucket.OK and r.id not in killed_ids
    ]

    report = Report(killed=killed, high_usage=high_usage)

    if killed or high_usage:
        report.summary = build_summary_embed(killed, high_usage, obfuscate, unit)
    elif send_always:
        report.summary = build_all_clear_embed(len(records))

    if per_server:
        report.server_embeds = [
            (server_slot(r), build_server_embed(r, obfuscate, unit)) for r in records
        ]

    return report
