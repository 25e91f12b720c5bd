"""Tests for the optional Basic auth gate."""

import base64

import pytest

from profile_app.presentation.security.basic_auth import BasicAuthGate


def _basic(raw: str) -> str:
    return "Basic " + base64.b64encode(raw.encode("utf-8")).decode("ascii")


class TestBasicAuthGate:
    """Tests for BasicAuthGate."""

    @pytest.mark.parametrize("username,password", [(None, None), ("admin", None), (None, "s3cret"), ("", "s3cret")])
    def test_disabled_without_both_credentials(self, username, password):
        gate = BasicAuthGate(username, password)

        assert not gate.enabled
        assert gate.is_authorized(None)
        assert gate.is_authorized("Basic garbage")

    def test_accepts_matching_credentials(self):
        gate = BasicAuthGate("admin", "s3cret")

        assert gate.enabled
        assert gate.is_authorized(_basic("admin:s3cret"))

    def test_scheme_is_case_insensitive(self):
        gate = BasicAuthGate("admin", "s3cret")
        token = base64.b64encode(b"admin:s3cret").decode("ascii")

        assert gate.is_authorized(f"basic {token}")

    def test_password_may_contain_colons(self):
        gate = BasicAuthGate("admin", "a:b:c")

        assert gate.is_authorized(_basic("admin:a:b:c"))
        assert not gate.is_authorized(_basic("admin:a"))

    @pytest.mark.parametrize(
        "header",
        [
            None,
            "",
            "Basic",
            "Bearer abc",
            "Basic !!!not-base64!!!",
            _basic("admin"),
            _basic("admin:wrong"),
            _basic("other:s3cret"),
            _basic("admin:s3cret "),
            "Basic " + base64.b64encode(b"\xff\xfe:\xff").decode("ascii"),
        ],
    )
    def test_rejects_everything_else(self, header):
        gate = BasicAuthGate("admin", "s3cret")

        assert not gate.is_authorized(header)

    def test_challenge_names_basic_scheme(self):
        assert BasicAuthGate("a", "b").challenge.startswith("Basic")
