# src/link_checker/utils/url_utils.py
import logging
import re
from enum import Enum
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

# Fragment without a path separator after it, anchored at the end.
TRAILING_FRAGMENT = re.compile(r"#[^/\\]*$")


class LinkKind(Enum):
    REMOTE = "remote"
    LOCAL = "local"
    OTHER = "other"


class UrlUtils:
    """A collection of static methods for classifying and cleaning references."""

    @staticmethod
    def get_scheme(link: str) -> str:
        """
        Returns the lower-cased scheme of a reference, or '' when there is none.
        Unparseable references are treated as scheme-less.
        """
        try:
            return urlsplit(link).scheme.lower()
        except ValueError:
            logger.debug("Could not parse reference %r, treating it as local.", link)
            return ""

    @staticmethod
    def classify(link: str) -> LinkKind:
        match UrlUtils.get_scheme(link):
            case "http" | "https":
                return LinkKind.REMOTE
            case "":
                return LinkKind.LOCAL
            case _:
                # mailto:, tel:, sms:, javascript:, data: and unknown schemes
                return LinkKind.OTHER

    @staticmethod
    def strip_fragment(link: str) -> str:
        return TRAILING_FRAGMENT.sub("", link)
