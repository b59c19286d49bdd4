# src/link_checker/services/link_dispatch_service.py
import asyncio
import logging
import re
from typing import Dict, List, Optional

from tqdm.asyncio import tqdm

from link_checker.model import ValidationOutcome
from link_checker.services.local_resolver_service import LocalResolverService
from link_checker.services.remote_validator_service import RemoteValidatorService
from link_checker.utils.url_utils import LinkKind, UrlUtils

logger = logging.getLogger(__name__)

NOT_FOUND = "not found"


def drop_ignored(links_to_filenames: Dict[str, List[str]], patterns: List[str]) -> Dict[str, List[str]]:
    """
    Removes references matching any of the regular expressions.
    A malformed pattern raises re.error.
    """
    compiled = [re.compile(p) for p in patterns]
    kept = {}
    for link, filenames in links_to_filenames.items():
        if any(rx.search(link) for rx in compiled):
            logger.debug("Ignoring reference %r", link)
            continue
        kept[link] = filenames
    return kept


class LinkDispatchService:
    """
    Routes every distinct reference to the validator matching its kind and
    collects one outcome per reference.
    """

    def __init__(self, resolver: LocalResolverService, remote: RemoteValidatorService, progress: bool = False):
        self.resolver = resolver
        self.remote = remote
        self.progress = progress

    def validate_local(self, link: str, filenames: List[str]) -> ValidationOutcome:
        if self.resolver.broken_for(filenames, link):
            return ValidationOutcome.broken(link, NOT_FOUND)
        return ValidationOutcome.ok(link)

    async def _validate_remote_all(self, links: List[str]) -> List[ValidationOutcome]:
        if not links:
            return []
        tasks = [asyncio.create_task(self.remote.validate(link)) for link in links]
        try:
            if self.progress:
                return await tqdm.gather(*tasks, desc="Checking", unit="link")
            return await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            raise

    async def dispatch(self, links_to_filenames: Dict[str, List[str]]) -> Dict[str, ValidationOutcome]:
        outcomes: Dict[str, Optional[ValidationOutcome]] = dict.fromkeys(links_to_filenames)
        remote_links: List[str] = []

        for link, filenames in links_to_filenames.items():
            match UrlUtils.classify(link):
                case LinkKind.REMOTE:
                    remote_links.append(link)
                case LinkKind.LOCAL:
                    outcomes[link] = self.validate_local(link, filenames)
                case _:
                    outcomes[link] = ValidationOutcome.ok(link)

        logger.info(
            "Validating %d distinct references (%d remote).", len(links_to_filenames), len(remote_links)
        )
        for outcome in await self._validate_remote_all(remote_links):
            outcomes[outcome.reference] = outcome

        return outcomes
