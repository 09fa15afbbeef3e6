#!/usr/bin/env python3
"""
KUBESHELL CLI SUITE
-------------------
Drives the `get` and `describe` subcommands against YAML dumps written
with ruamel, capturing the rich output.
"""

import base64

import pytest
from rich.text import Text
from ruamel.yaml import YAML

from kubeshell.cli.formatter import StatusHighlighter
from kubeshell.cli.main import KubeShellCLI, load_resources
from kubeshell.core.context import ContextMemory, Env
from conftest import ago, make_resource


def dump(path, docs):
    yaml = YAML()
    with open(path, "w") as f:
        yaml.dump_all(docs, f)
    return path


@pytest.fixture
def pod_list(tmp_path):
    items = [
        make_resource("web-1", namespace="prod", created=ago(days=1),
                      status={"phase": "Running", "podIP": "10.0.0.1"}),
        make_resource("db-0", namespace="data", created=ago(days=4),
                      status={"phase": "Pending"}),
    ]
    return dump(tmp_path / "pods.yaml", [{"apiVersion": "v1", "kind": "List", "items": items}])


@pytest.fixture
def cli(console_buffer):
    console, buf = console_buffer
    return KubeShellCLI(console=console, env=Env(memory=ContextMemory())), buf


def test_load_resources_flattens_lists_and_streams(tmp_path, pod_list):
    stream = dump(tmp_path / "stream.yaml", [make_resource("a"), None, make_resource("b")])
    assert [r["metadata"]["name"] for r in load_resources(stream)] == ["a", "b"]
    assert len(load_resources(pod_list)) == 2


def test_get_prints_numbered_table(cli, pod_list):
    shell, buf = cli
    assert shell.run(["get", "pods", str(pod_list), "--sort", "name"]) == 0

    out = buf.getvalue()
    assert "####" in out and "Namespace" in out
    assert out.index("db-0") < out.index("web-1")
    assert [h.name for h in shell.env.memory] == ["db-0", "web-1"]


def test_get_namespace_scope(cli, pod_list):
    shell, buf = cli
    assert shell.run(["get", "po", str(pod_list), "-n", "prod"]) == 0
    assert [h.name for h in shell.env.memory] == ["web-1"]
    assert "Namespace" not in buf.getvalue()


def test_get_missing_file_clears_memory(cli, tmp_path, pod_list):
    shell, buf = cli
    shell.run(["get", "pods", str(pod_list)])
    assert len(shell.env.memory) == 2

    assert shell.run(["get", "pods", str(tmp_path / "nope.yaml")]) == 1
    assert len(shell.env.memory) == 0
    assert "not found" in buf.getvalue()


def test_get_bad_regex_still_lists(cli, pod_list):
    shell, buf = cli
    assert shell.run(["get", "pods", str(pod_list), "--regex", "("]) == 0
    assert "Invalid filter regex" in buf.getvalue()
    assert len(shell.env.memory) == 2


def test_get_mistyped_sort_is_a_usage_error(cli, pod_list, capsys):
    shell, buf = cli
    with pytest.raises(SystemExit) as exc:
        shell.run(["get", "pods", str(pod_list), "--sort", "nmae"])

    assert exc.value.code == 2
    err = capsys.readouterr().err
    assert "invalid sort key 'nmae'" in err
    assert "age, ip, name, namespace, node, phase, ready, restarts" in err
    # Rejected before anything was listed
    assert buf.getvalue() == ""


def test_get_sort_key_is_case_insensitive(cli, pod_list):
    shell, _ = cli
    assert shell.run(["get", "pods", str(pod_list), "--sort", "NAME"]) == 0
    assert len(shell.env.memory) == 2


def test_describe_secret_redacts(cli, tmp_path):
    shell, buf = cli
    secret = make_resource("db-creds", kind="Secret", type="Opaque",
                           data={"password": base64.b64encode(b"hunter2").decode()})
    path = dump(tmp_path / "secret.yaml", [secret])

    assert shell.run(["describe", "secret", str(path)]) == 0
    out = buf.getvalue()
    assert "password=7 bytes" in out
    assert "hunter2" not in out


def test_describe_by_name_and_bad_timestamp(cli, tmp_path):
    shell, buf = cli
    path = dump(tmp_path / "pods.yaml", [
        make_resource("ok", created="2024-01-01T00:00:00Z"),
        make_resource("broken", created="not-a-time"),
    ])
    assert shell.run(["describe", "pod", str(path), "--name", "ok"]) == 0
    assert "2024-01-01 00:00:00 UTC" in buf.getvalue()

    assert shell.run(["describe", "pod", str(path), "--name", "broken"]) == 1
    assert "Invalid creation timestamp" in buf.getvalue()

    assert shell.run(["describe", "pod", str(path), "--item", "9"]) == 1


@pytest.mark.parametrize("value, style, word", [
    ("Running", "kube.good", "Running"),
    ("  Message: Deployment has minimum availability.", "kube.good", "Deployment has minimum availability."),
    ("CrashLoopBackOff", "kube.bad", "CrashLoopBackOff"),
    ("Pending", "kube.warn", "Pending"),
])
def test_status_highlighting(value, style, word):
    text = Text(value)
    StatusHighlighter().highlight(text)
    assert [value[s.start:s.end] for s in text.spans if s.style == style] == [word]
