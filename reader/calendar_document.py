"""Reader for the markdown calendar document."""
import logging
import time
from pathlib import Path

import requests

logger = logging.getLogger(__name__)


class CalendarDocumentReader:
    """Reads the calendar document from a URL or a local file."""

    MAX_RETRIES = 3
    BASE_DELAY = 1  # seconds

    def __init__(self, timeout: int = 30):
        """
        Initialize the document reader.

        Args:
            timeout: HTTP request timeout in seconds (default: 30)
        """
        self.timeout = timeout

    def read(self, location: str) -> str:
        """
        Read the calendar document.

        Args:
            location: HTTP(S) URL or local file path

        Returns:
            Document text

        Raises:
            requests.RequestException: If all retry attempts fail
            OSError: If the local file cannot be read
        """
        if self.is_url(location):
            text = self._fetch_document(location)
        else:
            logger.info(f"Reading calendar document from {location}")
            text = Path(location).read_text(encoding='utf-8')

        logger.info(f"Read calendar document ({len(text)} characters)")
        return text

    @staticmethod
    def is_url(location: str) -> bool:
        return location.startswith(('http://', 'https://'))

    def _fetch_document(self, url: str) -> str:
        """
        Fetch the document over HTTP with retry logic.

        Args:
            url: Document URL

        Returns:
            Document text

        Raises:
            requests.RequestException: If all retry attempts fail
        """
        for attempt in range(self.MAX_RETRIES):
            try:
                logger.info(
                    f"Fetching calendar document (attempt {attempt + 1}/{self.MAX_RETRIES})"
                )
                response = requests.get(url, timeout=self.timeout)
                response.raise_for_status()
                response.encoding = 'utf-8'
                return response.text

            except requests.RequestException as e:
                if attempt < self.MAX_RETRIES - 1:
                    # Exponential backoff
                    delay = self.BASE_DELAY * (2 ** attempt)
                    logger.warning(
                        f"Request failed (attempt {attempt + 1}/{self.MAX_RETRIES}): {e}. "
                        f"Retrying in {delay} seconds..."
                    )
                    time.sleep(delay)
                else:
                    logger.error(
                        f"All {self.MAX_RETRIES} retry attempts failed. Last error: {e}"
                    )
                    raise
