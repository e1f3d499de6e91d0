import logging

import requests

from ..errors import LoadError

logger = logging.getLogger(__name__)


def is_url(src: object) -> bool:
    return isinstance(src, str) and src.lower().startswith(("http://", "https://"))


def fetch_bytes(url: str, timeout: int = 60) -> bytes:
    """
    Download a workbook or csv and return its raw bytes.

    Any HTTP or connection failure is fatal for the load and is raised as
    LoadError; there is no retry.
    """
    logger.info("Fetching %s", url)
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise LoadError(f"Could not fetch {url}: {e}") from e
    return resp.content
