"""
HTTP transport for short-link expansion.

Follows redirects with a browser-like session and reports the final URL.
"""
import logging

import requests

from biolink.config import SHORT_LINK_TIMEOUT_SECS

logger = logging.getLogger('services.shortlinks')


class RedirectTransport:
    """
    Callable transport: ``RedirectTransport()(url) -> final_url``.

    One GET per call, redirects followed, body never read. HTTP errors raise
    so the resolver can drop just that link.
    """

    def __init__(self, timeout: float = SHORT_LINK_TIMEOUT_SECS, session: requests.Session = None):
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({
            'User-Agent': (
                'Mozilla/5.0 (Windows NT 10.0; Win64; x64) '
                'AppleWebKit/537.36 (KHTML, like Gecko) '
                'Chrome/120.0.0.0 Safari/537.36'
            )
        })

    def __call__(self, url: str) -> str:
        resp = self._session.get(url, timeout=self.timeout, allow_redirects=True, stream=True)
        try:
            resp.raise_for_status()
            final_url = resp.url
        finally:
            resp.close()
        if resp.history:
            logger.debug("%s redirected %d time(s) → %s", url, len(resp.history), final_url)
        return final_url
