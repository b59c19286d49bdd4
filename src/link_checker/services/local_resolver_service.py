# src/link_checker/services/local_resolver_service.py
import logging
import posixpath
from typing import Iterable, List

from link_checker.utils.path_utils import PathUtils
from link_checker.utils.url_utils import UrlUtils

logger = logging.getLogger(__name__)

SELF_REFERENCES = ("", ".", "./")
INDEX_FILE = "index.html"


class LocalResolverService:
    """
    Resolves same-tree references against the in-memory set of document paths.
    No filesystem access happens here.
    """

    def __init__(self, filenames: Iterable[str]):
        self.filenames = {PathUtils.normalize(f) for f in filenames}

    @staticmethod
    def join(src: str, dest: str) -> str:
        """
        Joins `dest` onto the directory of `src`. A leading '/' does not reset to the
        tree root: 'blog' + '/img/a.png' gives 'blog/img/a.png'.
        """
        return posixpath.normpath(posixpath.join(posixpath.dirname(src), dest.lstrip("/")))

    def is_valid(self, src: str, dest: str) -> bool:
        src = PathUtils.normalize(src)
        dest = UrlUtils.strip_fragment(dest)

        if dest in SELF_REFERENCES:
            return True

        link_path = self.join(src, dest)
        if link_path in SELF_REFERENCES or link_path == posixpath.normpath(posixpath.dirname(src) or "."):
            return True

        return link_path in self.filenames or posixpath.join(link_path, INDEX_FILE) in self.filenames

    def broken_for(self, filenames: List[str], dest: str) -> List[str]:
        """Returns the citing documents for which `dest` does not resolve."""
        bad = [f for f in filenames if not self.is_valid(f, dest)]
        if bad:
            logger.debug("Local reference %r not found from %s", dest, ", ".join(bad))
        return bad
