import json
import logging

import aiohttp

from gender_api import config
from gender_api.genderException import ApiError
from gender_api.genderHandler import GenderRequest

logger = logging.getLogger(__name__)


class GenderWrapperAsync(GenderRequest):
    """
    Same builder as GenderHandler, but the terminal calls return a coroutine:

        result = await GenderWrapperAsync().by_localization('DE').check_name('Andrea')

    Validation errors are still raised immediately, before anything is awaited.
    A session passed in is reused and left open, otherwise one is opened per request.
    """

    def __init__(self, serverKey: str = None, url: str = None, timeout: float = None,
                 session: aiohttp.ClientSession = None):
        super().__init__(serverKey, url)
        self.timeout = timeout if timeout is not None else config.get_timeout()
        self.session = session

    async def _fetch(self, session, url, params):
        kwargs = {'params': params}
        if self.timeout is not None:
            # a caller's session keeps its own default otherwise
            kwargs['timeout'] = aiohttp.ClientTimeout(total=self.timeout)
        async with session.get(url, **kwargs) as resp:
            text = await resp.text()
            if not self._is_success(resp.status):
                logger.warning("gender-api.com answered HTTP %s on %s", resp.status, url)
                raise ApiError('Gender API response error', status_code=resp.status)
            return json.loads(text)

    async def get_response(self):
        method, url, params = self.build_request()
        logger.debug("%s %s with %s", method, url, sorted(k for k in params if k != 'key'))

        if self.session is not None:
            return await self._fetch(self.session, url, params)

        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            return await self._fetch(session, url, params)
