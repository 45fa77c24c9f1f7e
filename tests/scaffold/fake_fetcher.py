"""FakeFetcher: test double for Fetcher that serves canned bodies."""

import os

from kickstart.scaffold.errors import NetworkFailure


class FakeFetcher:

    def __init__(self, bodies=None, failing_urls=()):
        self._bodies = bodies or {}
        self._failing_urls = set(failing_urls)
        self.fetched = []

    def fetch_text(self, url):
        self.fetched.append(url)
        if url in self._failing_urls:
            raise NetworkFailure(url, "HTTP 404")
        return self._bodies.get(url, f"# fetched from {url}\nLayout/Tab:\n  Enabled: true\n")

    def fetch_to_file(self, url, dest):
        text = self.fetch_text(url)
        os.makedirs(os.path.dirname(dest), exist_ok=True)
        with open(dest, "w") as f:
            f.write(text)
        return dest
