# src/link_checker/plugin.py
import logging
from typing import Any, Callable, Dict, Mapping, Optional

from link_checker.controllers.link_check_controller import LinkCheckController
from link_checker.utils.config_loader import build_settings

logger = logging.getLogger(__name__)


def link_checker(options: Optional[Dict[str, Any]] = None) -> Callable[[Mapping[str, Any]], None]:
    """
    Build-pipeline hook: merges `options` over the defaults once and returns a
    callable that checks a file set, raising BrokenLinksError on broken links.
    """
    settings = build_settings(options)
    controller = LinkCheckController(settings)

    def check(files: Mapping[str, Any]) -> None:
        logger.debug("Checking links in %d files.", len(files))
        controller.check(files)

    return check
