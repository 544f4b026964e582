"""Fetch rule files from a remote HTTP rule store."""

from __future__ import annotations

import logging

import aiohttp

from ..exceptions import NetworkError, RuleNotFoundError, RuleSourceError, ValidationError
from ..models import RuleSet
from .loader import RuleRegistry, build_rule_set

_LOGGER = logging.getLogger(__name__)
_DEFAULT_TIMEOUT = aiohttp.ClientTimeout(total=30)


class RemoteRuleSource:
    """Loads ``{base_url}/{city}.json`` rule documents over HTTP."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        base_url: str,
        *,
        timeout: aiohttp.ClientTimeout | None = None,
        retry_count: int = 0,
    ) -> None:
        if session is None:
            raise ValidationError("Session is required.")
        if not isinstance(base_url, str) or not base_url.strip():
            raise ValidationError("base_url must be a non-empty string.")
        self._session = session
        self._base_url = base_url.strip().rstrip("/")
        self._timeout = timeout or _DEFAULT_TIMEOUT
        self._retry_count = max(0, retry_count)

    def _build_url(self, city: str) -> str:
        if not isinstance(city, str) or not city.strip():
            raise ValidationError("City must be a non-empty string.")
        return f"{self._base_url}/{city.strip().lower()}.json"

    async def fetch(self, city: str) -> RuleSet:
        url = self._build_url(city)
        _LOGGER.debug("Fetching tax rules for %s", city)
        data = await self._request_json(url)
        rule_set = build_rule_set(data)
        _LOGGER.info("Loaded tax rules for city %s from %s", rule_set.display_name, url)
        return rule_set

    async def load_into(self, registry: RuleRegistry, city: str) -> RuleSet:
        rule_set = await self.fetch(city)
        registry.register(rule_set)
        return rule_set

    async def _request_json(self, url: str) -> object:
        attempts = self._retry_count + 1
        for attempt in range(attempts):
            try:
                async with self._session.request(
                    "GET",
                    url,
                    timeout=self._timeout,
                    ssl=True,
                ) as response:
                    self._raise_for_status(response)
                    try:
                        return await response.json()
                    except (aiohttp.ContentTypeError, ValueError) as exc:
                        raise RuleSourceError("Response did not contain valid JSON.") from exc
            except (aiohttp.ClientError, TimeoutError) as exc:
                if attempt >= attempts - 1:
                    raise NetworkError("Network request failed.") from exc
                _LOGGER.warning(
                    "Rule request to %s failed (attempt %d of %d)", url, attempt + 1, attempts
                )
        raise RuleSourceError("Request failed.")

    def _raise_for_status(self, response: aiohttp.ClientResponse) -> None:
        if 200 <= response.status < 300:
            return
        if response.status == 404:
            raise RuleNotFoundError("Rule source has no rules for this city.")
        raise RuleSourceError(f"Rule source request failed with status {response.status}.")
