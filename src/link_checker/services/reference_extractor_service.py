# src/link_checker/services/reference_extractor_service.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

from bs4 import BeautifulSoup

from link_checker.model import HtmlSettings
from link_checker.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


class ReferenceExtractorService:
    """
    Collects reference strings (href/src-like attribute values) from HTML documents.
    Stateless apart from the tag configuration; parsing is best-effort and never raises
    on malformed markup.
    """

    def __init__(self, html_settings: HtmlSettings):
        self.pattern = html_settings.pattern
        self.tags = html_settings.tags

    @staticmethod
    def _contents_of(document: Any) -> str | bytes:
        # Build pipelines hand over objects with a 'contents' attribute.
        contents = getattr(document, "contents", document)
        return contents if contents is not None else ""

    @staticmethod
    def _attribute_value(element, attribute: str) -> str:
        value = element.get(attribute)
        if value is None:
            return ""
        # bs4 returns multi-valued attributes (class, rel, ...) as lists
        if isinstance(value, list):
            return " ".join(value)
        return value

    def extract_references(self, contents: str | bytes) -> List[str]:
        """Returns the non-empty configured attribute values, in document order."""
        soup = BeautifulSoup(contents, "html.parser")
        out: List[str] = []
        for element in soup.find_all(list(self.tags)):
            for attribute in self.tags.get(element.name, []):
                value = self._attribute_value(element, attribute)
                if value:
                    out.append(value)
        return out

    def extract_all(self, files: Mapping[str, Any]) -> Dict[str, List[str]]:
        """
        Maps every document matching the glob pattern (by normalized path) to its references.
        """
        filenames_to_links: Dict[str, List[str]] = {}
        for filename, document in files.items():
            normalized = PathUtils.normalize(filename)
            if not PathUtils.glob_match(self.pattern, normalized):
                continue
            links = self.extract_references(self._contents_of(document))
            logger.debug("Found %d references in %s", len(links), normalized)
            filenames_to_links[normalized] = links
        return filenames_to_links
