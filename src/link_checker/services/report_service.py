# src/link_checker/services/report_service.py
from typing import Dict, List

from link_checker.model import LinkReport, ValidationOutcome


def build_report(
        outcomes: Dict[str, ValidationOutcome],
        filenames_to_links: Dict[str, List[str]],
) -> LinkReport:
    """
    Maps broken outcomes back onto every document citing them.
    References that were never validated (ignored ones) are skipped.
    """
    errors: Dict[str, List[str]] = {}
    for filename, links in filenames_to_links.items():
        link_errors = [
            f"{link} ({outcomes[link].error})"
            for link in links
            if link in outcomes and not outcomes[link].valid
        ]
        if link_errors:
            errors[filename] = link_errors
    return LinkReport(errors=errors)
