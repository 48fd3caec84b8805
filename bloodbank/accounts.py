# bloodbank/accounts.py
import logging

from .exceptions import DuplicateUsername

logger = logging.getLogger(__name__)


class AccountDirectory:
    """
    In-memory username -> password mapping used to gate the donor menu.

    Passwords are stored and compared as plain text. Accounts can't be
    changed or removed once created.
    """

    def __init__(self):
        self._passwords = {}

    def __contains__(self, username):
        return username in self._passwords

    def __len__(self):
        return len(self._passwords)

    def register(self, username, password):
        if username in self._passwords:
            logger.warning("Registration rejected: username %s already exists", username)
            raise DuplicateUsername(username)
        self._passwords[username] = password
        logger.info("Account created for %s", username)

    def authenticate(self, username, password) -> bool:
        return username in self._passwords and self._passwords[username] == password
