# src/link_checker/services/remote_validator_service.py
import asyncio
import logging
from typing import Optional

import aiohttp

from link_checker.model import LinkCheckSettings, ValidationOutcome

logger = logging.getLogger(__name__)


class RemoteValidatorService:
    """
    Probes http(s) references.
    Manages the aiohttp session, concurrency (semaphore), and the HEAD -> GET fallback.
    """

    def __init__(self, settings: LinkCheckSettings):
        self.user_agent = settings.user_agent
        self.timeout = settings.timeout
        self.max_concurrency = settings.parallelism

        self.semaphore = asyncio.Semaphore(self.max_concurrency)
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def initialize(self):
        if not self.session or self.session.closed:
            timeout_obj = aiohttp.ClientTimeout(total=self.timeout)
            default_headers = {
                'User-Agent': self.user_agent
            }
            # Certificates are not verified
            connector = aiohttp.TCPConnector(ssl=False)
            self.session = aiohttp.ClientSession(
                connector=connector, timeout=timeout_obj, headers=default_headers
            )
            logger.debug("RemoteValidatorService: Session initialized (max concurrency %d).", self.max_concurrency)

    async def close(self):
        if self.session and not self.session.closed:
            await self.session.close()
            logger.debug("RemoteValidatorService: Session closed.")

    async def _request_status(self, url: str, method: str) -> int:
        async with self.session.request(method, url, allow_redirects=False) as response:
            return response.status

    async def validate(self, url: str) -> ValidationOutcome:
        """
        Main entry point. Sends HEAD, retries once as GET on 405, and classifies the result.
        Network failures become broken outcomes; anything else propagates.
        """
        if not self.session or self.session.closed:
            await self.initialize()

        async with self.semaphore:
            try:
                status = await self._request_status(url, "HEAD")
                # Some servers reject HEAD but accept GET
                if status == 405:
                    logger.debug("HEAD not allowed for %s, retrying as GET.", url)
                    status = await self._request_status(url, "GET")
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                reason = str(e) or "no response"
                logger.debug("Request to %s failed: %s", url, reason)
                return ValidationOutcome.broken(url, reason)

        if 400 <= status <= 599:
            logger.debug("Url %s returned status: '%i'.", url, status)
            return ValidationOutcome.broken(url, f"HTTP {status}")
        return ValidationOutcome.ok(url)
