"""
Shop listing scrapers for the supported upstream sources.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union

import requests
from bs4 import BeautifulSoup, FeatureNotFound

from ..core.exceptions import FetchError, ParseError
from ..core.models import Source, SourceRecord

LoggerLike = Union[logging.Logger, logging.LoggerAdapter]


class ShopScraper(ABC):
    """Base class for shop scrapers."""

    source: Source

    def __init__(self, config: Dict[str, Any], logger: Optional[LoggerLike] = None):
        """
        Initialize shop scraper.

        Args:
            config: Service configuration
            logger: Request-scoped logger, defaults to a class logger
        """
        self.config = config
        self.logger = logger or logging.getLogger(self.__class__.__name__)

        http_config = config['http']
        self.timeout = http_config.get('timeout')
        self.session = requests.Session()
        self.session.verify = http_config.get('verify_tls', True)
        self.session.headers['User-Agent'] = http_config.get('user_agent', 'shopmerge')

        if not self.session.verify:
            self.logger.warning(
                f"TLS certificate verification is disabled for {self.source.value}"
            )

    @property
    def source_config(self) -> Dict[str, Any]:
        return self.config['sources'][self.source.value]

    def make_request(self, url: str, method: str = 'GET', **kwargs) -> requests.Response:
        """
        Make an HTTP request to the upstream.

        Args:
            url: Request URL
            method: HTTP method
            **kwargs: Additional request parameters

        Returns:
            Response object

        Raises:
            FetchError: On connection failure or an error status code
        """
        kwargs.setdefault('timeout', self.timeout)
        try:
            response = self.session.request(method, url, **kwargs)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(self.source.value, f"Request to {url} failed: {e}") from e
        return response

    @abstractmethod
    def fetch(self) -> List[SourceRecord]:
        """Fetch and normalize all shops from the upstream."""
        pass

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> 'ShopScraper':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


class SasShopScraper(ShopScraper):
    """Scraper for the SAS OnlineShopping JSON API."""

    source = Source.SAS_ONLINE_SHOPPING
    SAS_FIELDS = ('uuid', 'name', 'slug')

    def fetch(self) -> List[SourceRecord]:
        """Fetch all SAS shops."""
        response = self.make_request(self.source_config['api_url'])

        try:
            payload = response.json()
        except ValueError as e:
            raise ParseError(self.source.value, f"Invalid JSON response: {e}") from e

        if not isinstance(payload, dict):
            raise ParseError(self.source.value, "Expected a JSON object at the top level")

        shops = payload.get('data')
        if shops is None:
            shops = []
        if not isinstance(shops, list):
            raise ParseError(self.source.value, "Expected 'data' to be a list")

        records = []
        for shop in shops:
            if not isinstance(shop, dict):
                raise ParseError(self.source.value, f"Unexpected shop entry: {shop!r}")
            for key in self.SAS_FIELDS:
                value = shop.get(key)
                if value is not None and not isinstance(value, str):
                    raise ParseError(self.source.value, f"Expected string for '{key}', got {value!r}")
            records.append(SourceRecord.from_sas_json(shop))

        return records


class TrumfShopScraper(ShopScraper):
    """Scraper for the Trumf Netthandel shop listing page."""

    source = Source.TRUMF_NETTHANDEL

    def fetch(self) -> List[SourceRecord]:
        """Fetch all Trumf shops by scraping anchors carrying a data-name attribute."""
        response = self.make_request(self.source_config['page_url'])
        return [SourceRecord.from_trumf_name(name) for name in self.extract_names(response.content)]

    def extract_names(self, html: Union[str, bytes]) -> List[str]:
        """
        Extract shop names from the listing page.

        Args:
            html: Raw page content

        Returns:
            data-name values in document order
        """
        try:
            soup = BeautifulSoup(html, 'lxml')
        except FeatureNotFound:
            raise
        except Exception as e:
            raise ParseError(self.source.value, f"Could not parse HTML: {e}") from e

        return [
            anchor['data-name']
            for anchor in soup.find_all('a')
            if anchor.has_attr('data-name')
        ]
