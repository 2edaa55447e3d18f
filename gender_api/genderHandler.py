import json
import logging
from abc import ABC, abstractmethod

import requests

from gender_api import config
from gender_api.genderException import ApiError, ConfigurationError, ValidationError
from gender_api.supportedCountries import is_supported_country

logger = logging.getLogger(__name__)


class GenderRequest(ABC):
    """
    Fluent request builder for the gender-api.com GET endpoints.

    Localization calls (by_localization, by_ip, by_language) return the instance so they
    can be chained; check_* and get_stats are terminal and hand the accumulated
    parameters to get_response().

    Parameters are never cleared between terminal calls: a second check_* on the same
    instance still sends what the first one set. Use a fresh instance, or reset(),
    for independent requests.
    """
    method = 'GET'

    def __init__(self, serverKey: str = None, url: str = None):
        super().__init__()
        self.serverKey = serverKey if serverKey is not None else config.get_server_key()
        if not self.serverKey:
            raise ConfigurationError('Private server key is invalid')

        self.url = url or config.get_base_url()
        self._data = {}
        self._isStatRequest = False

    @abstractmethod
    def get_response(self):
        """
        Subclass: send the request described by build_request() and return the decoded body.
        """
        pass

    @property
    def params(self) -> dict:
        return dict(self._data)

    @property
    def path(self) -> str:
        return config.STATS_PATH if self._isStatRequest else config.LOOKUP_PATH

    def build_request(self):
        """Return (method, url, params) with the server key merged in."""
        params = dict(self._data)
        params['key'] = self.serverKey
        return self.method, f"{self.url}/{self.path}", params

    def reset(self):
        self._data = {}
        self._isStatRequest = False
        return self

    def check_name(self, names):
        """
        Query the gender of one name, or of up to 100 names at once.

        Any other iterable (list, generator, pandas Series, ...) is sent as a single
        'name' parameter joined with ';', the upstream then answers with one result per name.
        """
        if isinstance(names, str):
            self._data['name'] = names
        else:
            names = list(names)
            if len(names) > config.MAX_NAMES:
                raise ValidationError(f'The maximum number of names is limited to {config.MAX_NAMES}')
            self._data['name'] = config.NAME_SEPARATOR.join(str(n) for n in names)

        return self.get_response()

    # {"email":"markus.p@gmail.com","name":"markus","gender":"male","samples":150,"accuracy":99,"duration":"44ms"}
    def check_name_by_email(self, email: str):
        self._data['email'] = email
        return self.get_response()

    # {"last_name":"Miller","first_name":"Theresa","name":"theresa","gender":"female","samples":8065,"accuracy":98,"duration":"56ms"}
    def check_split_names(self, names: str):
        """
        Extract first and last name from a combined field, ideally typed as "First Name, Last Name".
        The value is stored as is: percent-encoding happens once, when the query string is built.
        """
        self._data['split'] = names
        return self.get_response()

    # In Italy, Andrea is male. In Germany, Andrea is female.
    def by_localization(self, country: str):
        if not is_supported_country(country):
            raise ValidationError(f'Not supported country: {country!r}')

        self._data['country'] = country
        return self

    def by_ip(self, ip: str):
        # No format check, the upstream resolves the country itself
        self._data['ip'] = ip
        return self

    def by_language(self, language: str):
        self._data['language'] = language
        return self

    def get_stats(self):
        """Account statistics (remaining requests etc.), sent to /get-stats."""
        self._isStatRequest = True
        return self.get_response()

    @staticmethod
    def _is_success(status: int) -> bool:
        return 200 <= status < 300


class GenderHandler(GenderRequest):
    """
    Synchronous client: every terminal call performs one blocking requests.get.

    Network faults (requests.ConnectionError, requests.Timeout, ...) are not caught here.
    """

    def __init__(self, serverKey: str = None, url: str = None, timeout: float = None):
        super().__init__(serverKey, url)
        self.timeout = timeout if timeout is not None else config.get_timeout()

    def get_response(self):
        method, url, params = self.build_request()
        logger.debug("%s %s with %s", method, url, sorted(k for k in params if k != 'key'))

        response = requests.get(url, params=params, timeout=self.timeout)
        if not self._is_success(response.status_code):
            logger.warning("gender-api.com answered HTTP %s on %s", response.status_code, url)
            raise ApiError('Gender API response error', status_code=response.status_code)

        return json.loads(response.text)
