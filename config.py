# config.py - Environment configuration for the database bootstrap
import os
from dotenv import load_dotenv

from errors import ConfigError

# Timeouts (seconds) for the scoped pymongo operations
CONNECT_TIMEOUT_SECONDS = 10
SEED_TIMEOUT_SECONDS = 10
INDEX_TIMEOUT_SECONDS = 30

REQUIRED_VARIABLES = ('MONGODB_URI', 'DB_NAME', 'JWT_SECRET')


class Settings:
    def __init__(self, mongodb_uri, db_name, jwt_secret):
        self.mongodb_uri = mongodb_uri
        self.db_name = db_name
        self.jwt_secret = jwt_secret

    def masked_uri(self):
        """Connection target without credentials, safe to print"""
        uri_parts = self.mongodb_uri.split('@')
        if len(uri_parts) > 1:
            return f"...@{uri_parts[-1][:50]}"
        return self.mongodb_uri[:50]


def load_settings(environ=None):
    """Read MONGODB_URI, DB_NAME and JWT_SECRET, trimmed and non-empty.

    A missing .env file is fine: containers inject the variables directly.
    Raises ConfigError naming the first variable that is empty.
    """
    if environ is None:
        if not load_dotenv():
            print("ℹ️ No .env file found; using environment variables from the host")
        environ = os.environ

    values = {}
    for name in REQUIRED_VARIABLES:
        value = (environ.get(name) or '').strip()
        if not value:
            print(f"❌ {name} not found in environment variables!")
            raise ConfigError(name)
        values[name] = value

    return Settings(
        mongodb_uri=values['MONGODB_URI'],
        db_name=values['DB_NAME'],
        jwt_secret=values['JWT_SECRET'],
    )
