"""Download static remote text files into the project."""

import os

import requests

from kickstart.scaffold.errors import NetworkFailure

RAILS_RUBOCOP_URL = "https://raw.githubusercontent.com/rails/rails/v{version}/.rubocop.yml"
RAILS_I18N_JA_URL = "https://raw.githubusercontent.com/svenfuchs/rails-i18n/master/rails/locale/ja.yml"

DEFAULT_TIMEOUT = 30


class Fetcher:
    """Fetches URLs over HTTPS with a shared requests Session."""

    def __init__(self, session=None, timeout=DEFAULT_TIMEOUT):
        self._session = session or requests.Session()
        self._timeout = timeout

    def fetch_text(self, url):
        """Return the body of *url*.

        Raises:
            NetworkFailure: On connection errors, timeouts or a non-200 status.
        """
        try:
            response = self._session.get(url, timeout=self._timeout, allow_redirects=True)
        except requests.RequestException as e:
            raise NetworkFailure(url, str(e)) from e
        if response.status_code != 200:
            raise NetworkFailure(url, f"HTTP {response.status_code}")
        return response.text

    def fetch_to_file(self, url, dest):
        """Download *url* and write it verbatim to *dest*."""
        text = self.fetch_text(url)
        parent = os.path.dirname(dest)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(dest, "w", encoding="utf-8") as f:
            f.write(text)
        return dest
