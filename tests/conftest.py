import io
import logging

import pytest
from django.core.management import call_command

from bloodbank.accounts import AccountDirectory
from bloodbank.management.commands.bloodbank import Command
from bloodbank.registry import DonationRegistry


@pytest.fixture
def registry():
    return DonationRegistry()


@pytest.fixture
def directory():
    return AccountDirectory()


@pytest.fixture
def bank_logs(caplog):
    """caplog wired to the bloodbank logger tree (it doesn't propagate to root)."""
    logger = logging.getLogger("bloodbank")
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.INFO, logger="bloodbank")
    yield caplog
    logger.removeHandler(caplog.handler)


@pytest.fixture
def run_console():
    """
    Drive the interactive console with scripted answers, one per line.
    Returns (output, command) so tests can look at the session state too.
    """
    def _run(*answers, **options):
        command = Command()
        out = io.StringIO()
        script = "".join(f"{answer}\n" for answer in answers)
        options.setdefault("no_banner", True)
        call_command(command, stdin=io.StringIO(script), stdout=out, no_color=True, **options)
        return out.getvalue(), command

    return _run
