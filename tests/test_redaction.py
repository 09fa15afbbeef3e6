#!/usr/bin/env python3
"""
KUBESHELL REDACTION SUITE
-------------------------
Secret data must never be shown verbatim, except for the bearer token of
a service account token secret.
"""

import base64

import pytest

from kubeshell.describe.evaluator import KeyValueDump, describe_object
from kubeshell.describe.redaction import INVALID_UTF8, UNDECODABLE, UNKNOWN, render_value
from kubeshell.resources.descriptors import SECRET
from conftest import make_resource

SA_TYPE = "kubernetes.io/service-account-token"


def b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


@pytest.mark.parametrize("raw", [b"", b"hunter2", b"\x00\xff" * 10])
def test_flagged_values_show_only_byte_count(raw):
    assert render_value("password", b64(raw), True, "Opaque") == f"{len(raw)} bytes"


def test_token_key_outside_service_account_secret_is_still_redacted():
    assert render_value("token", b64(b"abc.def.ghi"), True, "Opaque") == "11 bytes"


def test_service_account_token_is_decoded():
    assert render_value("token", b64(b"abc.def.ghi"), True, SA_TYPE) == "abc.def.ghi"


def test_service_account_other_keys_stay_redacted():
    assert render_value("ca.crt", b64(b"-----BEGIN-----"), True, SA_TYPE) == "15 bytes"


def test_service_account_token_with_invalid_utf8():
    assert render_value("token", b64(b"\xff\xfe\xfd"), True, SA_TYPE) == INVALID_UTF8


@pytest.mark.parametrize("key, rtype", [("password", "Opaque"), ("token", SA_TYPE)])
@pytest.mark.parametrize("bad", ["not base64!!", "abc", 42, None])
def test_invalid_base64_uses_placeholder(key, rtype, bad):
    assert render_value(key, bad, True, rtype) == UNDECODABLE


def test_unflagged_values_are_shown_as_is_without_decoding():
    encoded = b64(b"hunter2")
    assert render_value("password", encoded, False, "Opaque") == encoded
    assert render_value("token", encoded, False, SA_TYPE) == encoded
    assert render_value("count", 3, False, None) == UNKNOWN


def test_opaque_secret_scenario():
    secret = make_resource("db-creds", kind="Secret", type="Opaque",
                           data={"password": b64(b"hunter2")})
    report = dict(describe_object(secret, SECRET))
    assert report["Data:"] == "password=7 bytes\n"
    assert "hunter2" not in "".join(report.values())


def test_service_account_token_scenario():
    secret = make_resource("builder-token", kind="Secret", type=SA_TYPE,
                           data={"token": b64(b"abc.def.ghi"), "namespace": b64(b"ci")})
    report = dict(describe_object(secret, SECRET))
    assert report["Data:"] == "namespace=2 bytes\ntoken=abc.def.ghi\n"


def test_type_must_match_exactly():
    secret = make_resource("s", kind="Secret", type="kubernetes.io/service-account-token ",
                           data={"token": b64(b"abc")})
    report = dict(describe_object(secret, [("Data:", KeyValueDump("/data", secret=True))]))
    assert report["Data:"] == "token=3 bytes\n"
