#
# tprunner/telemetry/logger/processors.py
#
"""
Custom structlog processors for tprunner.
"""

from structlog.typing import EventDict, WrappedLogger

LEVEL_EMOJIS = {
    "debug": "🐛",
    "info": "ℹ️",
    "warning": "⚠️",
    "error": "❌",
    "critical": "💥",
}


def add_emoji_processor(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Prefixes the event with an emoji, unless one was passed explicitly."""
    emoji = event_dict.pop("emoji", None) or LEVEL_EMOJIS.get(event_dict.get("level", method_name), "➡️")
    event = event_dict.get("event")
    if isinstance(event, str):
        event_dict["event"] = f"{emoji} {event}"
    return event_dict


def remove_extra_keys_processor(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Drops keys bound to None so console lines stay short."""
    return {key: value for key, value in event_dict.items() if value is not None}


# 🔼⚙️
