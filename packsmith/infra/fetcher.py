# Copyright 2026 Pramod Kumar Voola
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# -----------------------------------------------------------------------------
# THE FETCHER - HTTP ARTIFACT DOWNLOADS
# -----------------------------------------------------------------------------
# Responsibility: Download one remote artifact into a local directory.
#
# Behaviour:
# - Blocking GET, body streamed to disk in chunks
# - Filename taken from the final URL (after redirects) unless given
# - Any failure raises FetchError; a partly written file is left in place
# - Optional retries on network errors and 5xx responses (default: none)
# -----------------------------------------------------------------------------

import time
from pathlib import Path
from urllib.parse import urlparse

import requests
from rich.console import Console

from packsmith.domain.errors import FetchError

console = Console()

# Name used when the URL path ends in "/" or has no path at all
FALLBACK_FILENAME = "tmp.bin"
CHUNK_SIZE = 64 * 1024
RETRY_DELAY_SECONDS = 2


def filename_from_url(url: str) -> str:
    """Last path segment of url, or FALLBACK_FILENAME when it is empty."""
    segment = urlparse(url).path.rsplit("/", 1)[-1]
    return segment or FALLBACK_FILENAME


class Fetcher:
    """
    Blocking HTTP(S) downloader.

    One instance is shared by the whole build. It holds no per-download
    state, so a single Fetcher can be reused for every artifact.
    """

    def __init__(self, timeout: float = 60.0, retries: int = 0) -> None:
        """
        Args:
            timeout: Seconds to wait for connect/read on each request.
            retries: Extra attempts after a network error or 5xx response.
        """
        self._timeout = timeout
        self._retries = retries

    def _get(self, url: str) -> requests.Response:
        """Issue the GET, retrying transient failures. Returns a 2xx response."""
        attempts = self._retries + 1
        last_error: FetchError | None = None

        for attempt in range(attempts):
            if attempt > 0:
                console.print(
                    f"[yellow][FETCH] Retrying {url} (attempt {attempt + 1}/{attempts})[/yellow]"
                )
                time.sleep(RETRY_DELAY_SECONDS * attempt)

            try:
                response = requests.get(url, stream=True, timeout=self._timeout)
            except requests.RequestException as e:
                last_error = FetchError(f"Request to {url} failed: {e}", url=url)
                last_error.__cause__ = e
                continue

            if 200 <= response.status_code < 300:
                return response

            status = response.status_code
            response.close()
            last_error = FetchError(f"HTTP {status} from {url}", url=url, status_code=status)
            if status < 500:
                break

        console.print(f"[red][FETCH] {last_error}[/red]")
        raise last_error

    def fetch(self, url: str, destination_dir: Path, filename: str | None = None) -> Path:
        """
        Download url into destination_dir.

        Args:
            url: Absolute http(s) URL.
            destination_dir: Existing, writable directory.
            filename: Local name to use. Derived from the final URL when None.

        Returns:
            Full path of the written file.

        Raises:
            FetchError: Network failure, non-2xx status or local write failure.
        """
        console.print(f"[cyan][FETCH] Downloading {url}[/cyan]")
        response = self._get(url)

        try:
            path = Path(destination_dir) / (filename or filename_from_url(response.url or url))
            console.print(f"[dim][FETCH] Saving to {path}[/dim]")

            try:
                with open(path, "wb") as f:
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
            except requests.RequestException as e:
                raise FetchError(f"Download of {url} interrupted: {e}", url=url) from e
            except OSError as e:
                raise FetchError(f"Could not write {path}: {e}", url=url) from e
        finally:
            response.close()

        return path
