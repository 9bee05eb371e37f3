import re

import requests
from packaging import version as _packaging_version

from out import log

BASE_URL = "https://www.python.org/ftp/python"
REQUEST_TIMEOUT = 12

VERSION_HREF = re.compile(r'href="([0-9]+\.[0-9]+\.[0-9]+)/"')


class CatalogError(Exception):
    """The version index could not be retrieved."""


def parse_version(v):
    return _packaging_version.Version(v)


# -----------------------------
# Utilities: HTTP GET wrapper
# -----------------------------
def http_get_text(url, timeout=REQUEST_TIMEOUT):
    """Fetch text content from URL."""
    r = requests.get(url, timeout=timeout)
    r.raise_for_status()
    return r.text


# -----------------------------
# Fetchers
# -----------------------------
def parse_python_versions(text):
    """
    Pull every N.N.N directory link out of an index page, sorted
    oldest first by numeric version.
    """
    matches = set(VERSION_HREF.findall(text))
    return sorted(matches, key=parse_version)


def fetch_python_versions(url=BASE_URL):
    log(f"[INFO] Fetching Python versions from: {url}")
    try:
        text = http_get_text(url)
    except requests.RequestException as e:
        log(f"[ERROR] Failed to fetch {url}: {e}")
        raise CatalogError(f"could not retrieve {url}") from e

    versions = parse_python_versions(text)
    if versions:
        log(f"[INFO] Found {len(versions)} Python versions; latest: {versions[-1]}")
    else:
        log("[WARN] No Python versions detected on page")
    return versions
