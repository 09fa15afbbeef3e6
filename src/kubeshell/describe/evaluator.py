#!/usr/bin/env python3
"""
KUBESHELL DESCRIBE EVALUATOR
----------------------------
Interprets a declarative list of (title, field descriptor) pairs against
one resource tree and produces the vertical report printed by describe.

The evaluator knows nothing about resource kinds. A kind's describe output
is entirely the descriptor list and transforms it passes in
(see kubeshell.resources.descriptors).

Author: KubeShell Team
Date: 2026-10-19
"""

import datetime
import logging
from dataclasses import dataclass
from typing import Any, Callable, Collection, Iterable, List, Mapping, Optional, Tuple, Union

from kubeshell.core.models import Resource
from kubeshell.core.settings import DESCRIBE_SKIP_KEYS
from kubeshell.core.values import keyval_string, metadata, parse_timestamp, pointer, val_str, val_str_opt, val_u64
from kubeshell.describe.redaction import render_value

logger = logging.getLogger("kubeshell.describe")

NONE_PLACEHOLDER = "<none>"

Transform = Callable[[Any], str]


@dataclass(frozen=True)
class PathString:
    path: str
    default: str


@dataclass(frozen=True)
class PathUint:
    path: str
    default: int = 0


@dataclass(frozen=True)
class KeyValueDump:
    """Dumps the map at `parent`. `secret` turns on the redaction policy."""
    parent: str
    secret: bool = False
    default: str = NONE_PLACEHOLDER


@dataclass(frozen=True)
class MetadataPathString:
    """Like PathString, but the path is relative to the metadata sub-tree."""
    path: str
    default: str


@dataclass(frozen=True)
class CreatedTimestamp:
    default: str = "<No CreationTime>"


@dataclass(frozen=True)
class Custom:
    """Runs `transform` over the value at `path` (the whole tree when path is None)."""
    transform: Transform
    default: str
    path: Optional[str] = None


FieldDescriptor = Union[PathString, PathUint, KeyValueDump, MetadataPathString, CreatedTimestamp, Custom]


def keyval_dump(resource: Resource, parent: str, secret: bool,
                skip_keys: Optional[Collection[str]] = None,
                default: str = NONE_PLACEHOLDER) -> str:
    keyvals = pointer(resource, parent)
    if not isinstance(keyvals, Mapping):
        return default

    resource_type = val_str_opt("/type", resource)
    # Hand-written dumps can mix int and str keys
    pairs = (
        (str(key), render_value(str(key), val, secret, resource_type))
        for key, val in sorted(keyvals.items(), key=lambda kv: str(kv[0]))
    )
    return keyval_string(pairs, skip_keys)


def format_created(created: datetime.datetime) -> str:
    local = created.astimezone()
    return f"{created:%Y-%m-%d %H:%M:%S} UTC ({local:%Y-%m-%d %H:%M:%S %z})"


def evaluate_field(resource: Resource, item: FieldDescriptor,
                   skip_keys: Optional[Collection[str]] = None) -> str:
    if isinstance(item, PathString):
        return val_str(item.path, resource, item.default)

    if isinstance(item, PathUint):
        return str(val_u64(item.path, resource, item.default))

    if isinstance(item, KeyValueDump):
        return keyval_dump(resource, item.parent, item.secret, skip_keys, item.default)

    if isinstance(item, MetadataPathString):
        return val_str(item.path, metadata(resource), item.default)

    if isinstance(item, CreatedTimestamp):
        raw = metadata(resource).get("creationTimestamp")
        if raw is None:
            return item.default
        # A malformed timestamp raises TimestampError and aborts the describe
        return format_created(parse_timestamp(raw))

    if isinstance(item, Custom):
        value = resource if item.path is None else pointer(resource, item.path)
        if value is None:
            return item.default
        return item.transform(value)

    raise TypeError(f"Unknown field descriptor: {item!r}")


def describe_object(resource: Resource,
                    fields: Iterable[Tuple[str, FieldDescriptor]],
                    skip_keys: Optional[Collection[str]] = DESCRIBE_SKIP_KEYS) -> List[Tuple[str, str]]:
    """Evaluates each descriptor in order, returning (title, text) report lines."""
    report = []
    for title, item in fields:
        report.append((title, evaluate_field(resource, item, skip_keys)))
    logger.debug(f"Described {val_str('/name', metadata(resource), '<No Name>')} with {len(report)} fields")
    return report
