"""Output formatters for meetup forecast display pairs."""

import json
from typing import Any

from meetup_weather.models.display import DisplayPair, DisplayRecord
from meetup_weather.models.status import OrchestratorStatus
from meetup_weather.models.tags import TagInfo
from meetup_weather.schedule.dates import format_date_label, format_hour_range
from meetup_weather.signal.classifier import tag_info


def tag_info_dict(info: TagInfo) -> dict[str, str]:
    return {
        "tag": info.tag.value,
        "emoji": info.emoji,
        "label": info.label,
        "description": info.description,
    }


def display_record_dict(r: DisplayRecord) -> dict[str, Any]:
    return {
        "target_date": r.target_date.isoformat(),
        "date_label": format_date_label(r.target_date),
        "temp_high": r.temp_high,
        "temp_low": r.temp_low,
        "precipitation": r.precipitation,
        "wind_speed": r.wind_speed,
        "summary": r.summary,
        "condition": r.condition.value,
        "has_data": r.has_data,
        "source_date": r.source_date.isoformat() if r.source_date else None,
        "is_substitute": r.is_substitute,
        "hourly": [
            {
                "hour": p.hour,
                "time": p.label,
                "temp": p.temp,
                "precipitation": p.precipitation,
                "wind_speed": p.wind_speed,
            }
            for p in r.hourly
        ],
        "tags": [tag_info_dict(info) for info in tag_info(r.tags)],
    }


def display_pair_dict(pair: DisplayPair) -> dict[str, Any]:
    return {
        "this_occurrence": display_record_dict(pair.this_occurrence),
        "next_occurrence": display_record_dict(pair.next_occurrence),
        "alerts": list(pair.alerts),
    }


def status_dict(s: OrchestratorStatus) -> dict[str, Any]:
    return {
        "state": s.state.value,
        "error_message": s.error_message,
        "location": s.location,
    }


def format_record_text(title: str, r: DisplayRecord) -> str:
    """Plain text card for one meetup date."""
    lines = [f"=== {title}: {format_date_label(r.target_date)} ==="]
    if not r.has_data:
        lines.append(r.summary)
        return "\n".join(lines)
    if r.is_substitute:
        lines.append(f"(No forecast for this date; showing {format_date_label(r.source_date)})")
    lines.append(
        f"High {r.temp_high}°F / Low {r.temp_low}°F | {r.condition.value} | "
        f"Precip {r.precipitation:.0f}% | Wind {r.wind_speed:.0f} mph"
    )
    if r.summary:
        lines.append(r.summary)
    if r.tags:
        lines.append(
            "Tags: " + ", ".join(f"{info.emoji} {info.label}" for info in tag_info(r.tags))
        )
    for p in r.hourly:
        lines.append(
            f"  {p.label:>5}  {p.temp:>3}°F  {p.precipitation:>3.0f}%  "
            f"{p.wind_speed:>4.1f} mph"
        )
    return "\n".join(lines)


def format_pair_text(
    pair: DisplayPair, weekday: str, start_hour: int, end_hour: int
) -> str:
    day = weekday.capitalize()
    header = f"{day} meetup, {format_hour_range(start_hour, end_hour)}"
    if pair.alerts:
        header += "\nAlerts: " + ", ".join(pair.alerts)
    return "\n\n".join([
        header,
        format_record_text(f"This {day}", pair.this_occurrence),
        format_record_text(f"Next {day}", pair.next_occurrence),
    ])


def format_pair_json(pair: DisplayPair) -> str:
    """JSON for programmatic consumption."""
    return json.dumps(display_pair_dict(pair), indent=2, ensure_ascii=False)
