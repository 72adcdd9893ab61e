import logging
import uuid as uuid_lib
from typing import Any, Protocol

import requests
from requests.adapters import HTTPAdapter
from returns.result import Failure, Result, Success

from ochre.errors import FetchError
from ochre.settings import Settings, settings

_LOGGER = logging.getLogger(__name__)

OchreEnvelope = dict[str, Any]


class Fetcher(Protocol):
    """Anything that can dereference an OCHRE item by its UUID."""

    def fetch_by_uuid(self, uuid: str) -> Result[OchreEnvelope, Exception]: ...


def validate_uuid(value: str) -> str:
    """
    :raises FetchError: If the value is not a UUID.
    :return str: The value, unchanged.
    """
    try:
        uuid_lib.UUID(value)
    except (ValueError, TypeError, AttributeError) as e:
        raise FetchError(f"Invalid UUID provided: {value}") from e
    return value


class HTTPConnector:
    """Base class for HTTP-based connectors."""

    def __init__(self, config: Settings):
        self.config = config
        self.session = self._init_session()

    def _init_session(self) -> requests.Session:
        """Initialize a requests session with pooling configuration."""
        session = requests.Session()

        adapter = HTTPAdapter(
            pool_connections=self.config.connection_pool_size,
            pool_maxsize=self.config.connection_pool_size,
        )

        session.mount("https://", adapter)
        session.mount("http://", adapter)
        return session

    def get(self, query: str) -> Any:
        """Perform a GET request against the OCHRE endpoint and decode the JSON."""
        url = f"{self.config.base_url}?{query}"
        _LOGGER.debug(f"Fetching from {url}")

        response = self.session.get(url, timeout=self.config.timeout_seconds)
        response.raise_for_status()
        return response.json()

    def close(self):
        """Close the session cleanly."""
        self.session.close()


class OchreConnector(HTTPConnector):
    """Connector for fetching items and website trees from the OCHRE API."""

    def __init__(self, config: Settings = settings):
        super().__init__(config)

    def fetch_by_uuid(self, uuid: str) -> Result[OchreEnvelope, Exception]:
        """
        Fetch a single OCHRE item in every language.

        :param str uuid: The item's UUID.
        :return Result: The contents of the ``ochre`` envelope, or the failure.
        """
        try:
            validate_uuid(uuid)
            data = self.get(f'uuid={uuid}&format=json&lang="*"')

            if not isinstance(data, dict) or "ochre" not in data:
                raise FetchError("Invalid OCHRE data: API response missing 'ochre' key")

            _LOGGER.info(f"Successfully fetched OCHRE data for '{uuid}'")
            return Success(data["ochre"])
        except requests.RequestException as e:
            _LOGGER.error(f"Request failed fetching OCHRE item {uuid}")
            return Failure(e)
        except Exception as e:
            _LOGGER.exception(f"Unexpected error fetching OCHRE item {uuid}")
            return Failure(e)

    def fetch_website_tree(self, abbreviation: str) -> Result[OchreEnvelope, Exception]:
        """
        Find a website tree by its project abbreviation.

        :param str abbreviation: The website abbreviation, matched lower-cased.
        :return Result: The contents of the ``ochre`` envelope holding the tree.
        """
        xquery = (
            "for $q in input()/ochre[tree[@type='lesson']"
            f"[identification/abbreviation='{abbreviation.lower()}']] return $q"
        )
        try:
            data = self.get(f"xquery={xquery}&format=json")

            result = data.get("result") if isinstance(data, dict) else None
            if (
                not isinstance(result, dict)
                or "ochre" not in result
                or "tree" not in result["ochre"]
            ):
                raise FetchError(f"Website “{abbreviation}” not found")

            _LOGGER.info(f"Successfully fetched website tree for '{abbreviation}'")
            return Success(result["ochre"])
        except requests.RequestException as e:
            _LOGGER.error(f"Request failed fetching website {abbreviation}")
            return Failure(e)
        except Exception as e:
            _LOGGER.exception(f"Unexpected error fetching website {abbreviation}")
            return Failure(e)
