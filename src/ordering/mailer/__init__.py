"""Mailer factory with get_mailer() / set_mailer() / reset_mailer()."""

from ordering.mailer.fake_adapter import FakeEmailAdapter
from ordering.mailer.port import EmailPort

_current_mailer: EmailPort | None = None


def get_mailer() -> EmailPort:
    """Return the current email adapter. Defaults to FakeEmailAdapter."""
    global _current_mailer
    if _current_mailer is None:
        _current_mailer = FakeEmailAdapter()
    return _current_mailer


def set_mailer(mailer: EmailPort) -> None:
    global _current_mailer
    _current_mailer = mailer


def reset_mailer() -> None:
    global _current_mailer
    _current_mailer = None
