import os
from dotenv import load_dotenv

from gender_api.genderException import ConfigurationError

load_dotenv()

# Name of the environment variable holding the private server key
SERVER_KEY_ENV = 'genderAPI_com_key'

DEFAULT_URL = 'https://gender-api.com'
LOOKUP_PATH = 'get'
STATS_PATH = 'get-stats'

# gender-api.com accepts at most 100 names in one query
MAX_NAMES = 100
NAME_SEPARATOR = ';'


def get_server_key():
    return os.getenv(SERVER_KEY_ENV)


def get_base_url():
    return os.getenv('GENDER_API_URL', DEFAULT_URL).strip().rstrip('/')


def get_timeout():
    """Seconds before a request is abandoned, None (no timeout) when GENDER_API_TIMEOUT is unset."""
    timeout = os.getenv('GENDER_API_TIMEOUT', '').strip()
    if not timeout:
        return None
    try:
        return float(timeout)
    except ValueError:
        raise ConfigurationError(f'GENDER_API_TIMEOUT must be a number of seconds, got {timeout!r}') from None
