#!/usr/bin/env python3
"""
KUBESHELL VALUES - Tree Access & Time Formatting
------------------------------------------------
Helpers shared by the list and describe projections:
1. Path resolution against a resource tree ("/spec/nodeName")
2. Creation timestamp parsing and human readable ages ("3d 4h")
3. The built-in metadata extractors (Name, Namespace, Age, Labels)

Author: KubeShell Team
Date: 2026-10-19
"""

import datetime
from typing import Any, Collection, Iterable, Mapping, Optional, Tuple

from kubeshell.core.errors import TimestampError
from kubeshell.core.models import Resource

_MISSING = object()


def _unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def pointer(tree: Any, path: str) -> Any:
    """
    Resolves a JSON-pointer style path against nested dicts and lists.
    Returns None when any segment is missing. "" resolves to the tree itself.
    """
    if path == "":
        return tree
    if not path.startswith("/"):
        return None

    current = tree
    for token in path[1:].split("/"):
        token = _unescape(token)
        if isinstance(current, Mapping):
            current = current.get(token, _MISSING)
        elif isinstance(current, list):
            if not token.isdigit():
                return None
            idx = int(token)
            current = current[idx] if idx < len(current) else _MISSING
        else:
            return None
        if current is _MISSING:
            return None
    return current


def val_str_opt(path: str, tree: Any) -> Optional[str]:
    value = pointer(tree, path)
    return value if isinstance(value, str) else None


def val_str(path: str, tree: Any, default: str) -> str:
    value = val_str_opt(path, tree)
    return default if value is None else value


def val_u64(path: str, tree: Any, default: int = 0) -> int:
    value = pointer(tree, path)
    # bool is an int subclass, but "replicas: true" is not a count
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    return default


def metadata(resource: Resource) -> Mapping[str, Any]:
    meta = resource.get("metadata") if isinstance(resource, Mapping) else None
    return meta if isinstance(meta, Mapping) else {}


# --- Time handling ---

def parse_timestamp(raw: Any) -> datetime.datetime:
    """
    Parses an RFC 3339 creation timestamp into an aware UTC datetime.
    YAML loaders may already hand us a datetime; a naive one is taken as UTC.
    """
    if isinstance(raw, datetime.datetime):
        parsed = raw
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=datetime.timezone.utc)
        return parsed.astimezone(datetime.timezone.utc)

    if not isinstance(raw, str):
        raise TimestampError(f"Creation timestamp is not a string: {raw!r}")

    text = raw.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.datetime.fromisoformat(text)
    except ValueError as e:
        raise TimestampError(f"Invalid creation timestamp '{raw}': {e}") from e

    if parsed.tzinfo is None:
        raise TimestampError(f"Creation timestamp '{raw}' has no UTC offset")
    return parsed.astimezone(datetime.timezone.utc)


def creation_timestamp(resource: Resource) -> Optional[datetime.datetime]:
    """The parsed creation time, or None if the resource has none."""
    raw = metadata(resource).get("creationTimestamp")
    if raw is None:
        return None
    return parse_timestamp(raw)


def format_duration(delta: datetime.timedelta) -> str:
    secs = int(delta.total_seconds())
    if secs < 0:
        return f"{secs}s"

    days, hours = secs // 86400, secs // 3600
    minutes = secs // 60
    if days > 365:
        years = days // 365
        return f"{years}y {days - years * 365}d"
    if days > 0:
        return f"{days}d {hours - 24 * days}h"
    if hours > 0:
        return f"{hours}h {minutes - 60 * hours}m"
    if minutes > 0:
        return f"{minutes}m {secs - 60 * minutes}s"
    return f"{secs}s"


def time_since(instant: datetime.datetime, now: Optional[datetime.datetime] = None) -> str:
    now = now or datetime.datetime.now(datetime.timezone.utc)
    return format_duration(now - instant)


def keyval_string(pairs: Iterable[Tuple[str, str]],
                  skip_keys: Optional[Collection[str]] = None) -> str:
    """Builds a multi-line 'key=value' block, one line per pair."""
    lines = []
    for key, val in pairs:
        if skip_keys and key in skip_keys:
            continue
        lines.append(f"{key}={val}\n")
    return "".join(lines)


# --- Built-in extractors ---

def extract_name(resource: Resource) -> Optional[str]:
    return val_str_opt("/name", metadata(resource))


def extract_namespace(resource: Resource) -> Optional[str]:
    return val_str_opt("/namespace", metadata(resource))


def extract_age(resource: Resource) -> Optional[str]:
    created = creation_timestamp(resource)
    return time_since(created) if created else None


def extract_labels(resource: Resource) -> Optional[str]:
    labels = metadata(resource).get("labels") or {}
    return keyval_string((str(k), str(v)) for k, v in sorted(labels.items(), key=lambda kv: str(kv[0])))
