import datetime
import io
from typing import Any, Dict, List, Optional

import pytest
from rich.console import Console

from kubeshell.core.context import ContextMemory, Env


def iso(ts: datetime.datetime) -> str:
    return ts.strftime("%Y-%m-%dT%H:%M:%SZ")


def ago(**delta: float) -> str:
    """RFC 3339 timestamp for `now - delta`."""
    return iso(datetime.datetime.now(datetime.timezone.utc) - datetime.timedelta(**delta))


def make_resource(name: Optional[str], namespace: Optional[str] = "default",
                  created: Optional[str] = None, labels: Optional[Dict[str, str]] = None,
                  kind: str = "Pod", **extra: Any) -> Dict[str, Any]:
    meta: Dict[str, Any] = {}
    if name is not None:
        meta["name"] = name
    if namespace is not None:
        meta["namespace"] = namespace
    if created is not None:
        meta["creationTimestamp"] = created
    if labels is not None:
        meta["labels"] = labels
    resource = {"apiVersion": "v1", "kind": kind, "metadata": meta}
    resource.update(extra)
    return resource


class RecordingWriter:
    """Stands in for KubeFormatter and records what the projection printed."""

    def __init__(self):
        self.tables: List[Any] = []
        self.warnings: List[str] = []
        self.errors: List[str] = []

    def print_table(self, titles, rows):
        self.tables.append((list(titles), [r.as_text() for r in rows]))

    def warn(self, message):
        self.warnings.append(message)

    def error(self, message):
        self.errors.append(message)


@pytest.fixture
def writer():
    return RecordingWriter()


@pytest.fixture
def env():
    # A private memory per test; the process-wide one stays untouched
    return Env(namespace="default", memory=ContextMemory())


@pytest.fixture
def console_buffer():
    buf = io.StringIO()
    console = Console(file=buf, width=200, color_system=None, force_terminal=False)
    return console, buf
