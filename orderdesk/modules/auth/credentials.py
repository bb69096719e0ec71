"""
Admin credential check against the configured ADMIN_USERNAME / ADMIN_PASSWORD.
"""

import hmac

from orderdesk.core.exceptions import ConfigurationError


class AdminCredentials:
    """The single admin account, built once from app config"""

    def __init__(self, username, password):
        self.username = username
        self.password = password

    @classmethod
    def from_config(cls, config):
        return cls(config.get('ADMIN_USERNAME'), config.get('ADMIN_PASSWORD'))

    def missing(self):
        missing = []
        if not self.username:
            missing.append('ADMIN_USERNAME')
        if not self.password:
            missing.append('ADMIN_PASSWORD')
        return missing

    def admin_user(self):
        """Descriptor returned to the client after a successful login"""
        return {
            'id': 1,
            'username': self.username,
            'name': 'Administrator',
            'email': 'admin@example.com',
            'role': 'admin',
        }


def normalize_username(username):
    return username.strip().lower()


def check_credentials(username, password, credentials):
    """
    Verify a login attempt.

    The username is compared case-insensitively after trimming; the password
    must match exactly.

    Returns:
        The admin user dict on success, None on bad credentials

    Raises:
        ConfigurationError: admin credentials are not configured
    """
    missing = credentials.missing()
    if missing:
        raise ConfigurationError(missing)

    if not isinstance(username, str) or not isinstance(password, str):
        return None

    username_ok = hmac.compare_digest(
        normalize_username(username).encode(),
        normalize_username(credentials.username).encode(),
    )
    password_ok = hmac.compare_digest(password.encode(), credentials.password.encode())

    if username_ok and password_ok:
        return credentials.admin_user()
    return None
