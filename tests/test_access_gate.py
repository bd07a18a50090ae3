import pytest

from portfolio_journal.access_gate import AccessGate
from portfolio_journal.errors import AuthenticationError, ConfigurationError


def test_gate_starts_locked():
    assert AccessGate("s3cret").authenticated is False


def test_exact_secret_opens_gate():
    gate = AccessGate("s3cret")
    assert gate.submit("s3cret") is True
    assert gate.authenticated is True


@pytest.mark.parametrize("candidate", ["", "S3CRET", "s3cret ", "wrong"])
def test_wrong_secret_is_rejected(candidate):
    gate = AccessGate("s3cret")
    for _ in range(3):
        with pytest.raises(AuthenticationError):
            gate.submit(candidate)
    assert gate.authenticated is False


@pytest.mark.parametrize("secret", [None, ""])
def test_missing_secret_is_a_configuration_error(secret):
    gate = AccessGate(secret)
    with pytest.raises(ConfigurationError):
        gate.submit("anything")
    assert gate.authenticated is False
    assert gate.configured is False


def test_gate_stays_open_after_later_wrong_attempt():
    gate = AccessGate("s3cret")
    gate.submit("s3cret")
    with pytest.raises(AuthenticationError):
        gate.submit("nope")
    assert gate.authenticated is True
