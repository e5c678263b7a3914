from __future__ import annotations

import base64
import json

import pytest

from profiles_api.core.errors import UnauthenticatedError
from profiles_api.core.security import TokenVerifier, bearer_token


def _segment(payload: dict) -> str:
    return base64.urlsafe_b64encode(json.dumps(payload).encode()).rstrip(b"=").decode()


def test_verify_returns_subject():
    verifier = TokenVerifier("s3cret")
    token = verifier.issue_token(42, email="alice@example.com", expires_in=60)

    assert verifier.verify(token) == 42
    assert verifier.decode(token)["userEmail"] == "alice@example.com"


def test_tampered_payload_is_rejected():
    verifier = TokenVerifier("s3cret")
    header, _, signature = verifier.issue_token(42).split(".")
    forged = f"{header}.{_segment({'sub': 1})}.{signature}"

    with pytest.raises(UnauthenticatedError):
        verifier.verify(forged)


def test_other_secret_is_rejected():
    token = TokenVerifier("one").issue_token(1)
    with pytest.raises(UnauthenticatedError):
        TokenVerifier("two").verify(token)


def test_unsigned_token_is_rejected():
    token = f"{_segment({'alg': 'none', 'typ': 'JWT'})}.{_segment({'sub': 1})}."
    with pytest.raises(UnauthenticatedError):
        TokenVerifier("s3cret").verify(token)


def test_expired_token_is_rejected():
    verifier = TokenVerifier("s3cret")
    token = verifier.issue_token(1, expires_in=-10)
    with pytest.raises(UnauthenticatedError):
        verifier.verify(token)


@pytest.mark.parametrize("token", ["", "abc", "a.b.c", "a.b"])
def test_malformed_tokens_are_rejected(token):
    with pytest.raises(UnauthenticatedError):
        TokenVerifier("s3cret").verify(token)


def test_missing_secret_rejects_everything():
    token = TokenVerifier("s3cret").issue_token(1)
    with pytest.raises(UnauthenticatedError):
        TokenVerifier("").verify(token)


def test_unsupported_algorithm_setting():
    with pytest.raises(ValueError):
        TokenVerifier("s3cret", "RS256")


def test_bearer_header_parsing():
    assert bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"
    for value in (None, "", "Basic xyz", "Bearer ", "bearer abc"):
        with pytest.raises(UnauthenticatedError):
            bearer_token(value)


@pytest.mark.parametrize("sub", [0, -5, 2**31, 2**70])
def test_out_of_range_subject_is_rejected(sub):
    verifier = TokenVerifier("s3cret")
    token = verifier.issue_token(sub)
    with pytest.raises(UnauthenticatedError):
        verifier.verify(token)
