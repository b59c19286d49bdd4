# src/link_checker/controllers/link_check_controller.py
import asyncio
import logging
import time
from typing import Any, Mapping, Optional

from link_checker.model import LinkCheckSettings, LinkReport
from link_checker.services.link_dispatch_service import LinkDispatchService, drop_ignored
from link_checker.services.local_resolver_service import LocalResolverService
from link_checker.services.reference_extractor_service import ReferenceExtractorService
from link_checker.services.reference_index_service import flip_references
from link_checker.services.remote_validator_service import RemoteValidatorService
from link_checker.services.report_service import build_report

logger = logging.getLogger(__name__)


class BrokenLinksError(Exception):
    """Raised by LinkCheckController.check() when at least one reference is broken."""

    def __init__(self, report: LinkReport):
        self.report = report
        super().__init__(report.render())


class LinkCheckController:
    """
    Orchestrates one link check over an in-memory file set:
    extract -> index -> ignore -> dispatch -> report.

    A fresh remote validator (and aiohttp session) is created for every run.
    """

    def __init__(self, settings: Optional[LinkCheckSettings] = None):
        self.settings = settings or LinkCheckSettings()
        self.extractor = ReferenceExtractorService(self.settings.html)

    def _make_remote_validator(self) -> RemoteValidatorService:
        return RemoteValidatorService(self.settings)

    async def run(self, files: Mapping[str, Any]) -> LinkReport:
        start_time = time.perf_counter()

        filenames_to_links = self.extractor.extract_all(files)
        links_to_filenames = flip_references(filenames_to_links)
        links_to_filenames = drop_ignored(links_to_filenames, self.settings.ignore)

        resolver = LocalResolverService(files.keys())
        async with self._make_remote_validator() as remote:
            dispatcher = LinkDispatchService(resolver, remote, progress=self.settings.progress)
            outcomes = await dispatcher.dispatch(links_to_filenames)

        report = build_report(outcomes, filenames_to_links)
        logger.info(
            "Checked %d references from %d documents in %.2fs; %d documents with broken links.",
            len(outcomes), len(filenames_to_links), time.perf_counter() - start_time, len(report.errors)
        )
        return report

    def check(self, files: Mapping[str, Any]) -> None:
        """Synchronous entry point. Raises BrokenLinksError when the report is not empty."""
        report = asyncio.run(self.run(files))
        if not report.ok:
            raise BrokenLinksError(report)
