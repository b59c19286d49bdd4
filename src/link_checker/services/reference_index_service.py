# src/link_checker/services/reference_index_service.py
from typing import Dict, List


def flip_references(filenames_to_links: Dict[str, List[str]]) -> Dict[str, List[str]]:
    """
    Inverts document -> references into reference -> citing documents.

    Keys and values keep first-seen order; a document citing the same
    reference twice is listed once.
    """
    links_to_filenames: Dict[str, List[str]] = {}
    for filename, links in filenames_to_links.items():
        for link in links:
            citing = links_to_filenames.setdefault(link, [])
            # Documents are visited one at a time, so a repeat can only be the last entry
            if not citing or citing[-1] != filename:
                citing.append(filename)
    return links_to_filenames
