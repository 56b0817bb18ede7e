"""HTML document sources.

A source is a named location (an http(s) URL or a local file) that
produces one HTML document. Sources can be declared in a YAML file:

    sources:
      - name: wiki_population
        location: https://en.wikipedia.org/wiki/List_of_countries_by_population
        cache: true
      - name: local_report
        location: data/reports/q3.html
"""

import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path

import requests
import yaml

from htmltables.guards import InvalidArgument, is_not_none_or_empty, is_valid_timeout, satisfies

logger = logging.getLogger(__name__)

CACHE_DIR = Path("data/cache")
DEFAULT_TIMEOUT = 30
DEFAULT_SOURCES_PATH = Path("sources.yaml")
USER_AGENT = "htmltables/0.1 (+https://pypi.org/project/htmltables/)"


def is_url(location: str) -> bool:
    return location.lower().startswith(("http://", "https://"))


def source_hash(raw_data: bytes | str) -> str:
    """Compute SHA256 hash of source data for change detection."""
    if isinstance(raw_data, str):
        raw_data = raw_data.encode("utf-8")
    return hashlib.sha256(raw_data).hexdigest()


@dataclass
class HtmlSource:
    """A named HTML document location.

    Args:
        name: Identifier used for caching and database records.
        location: http(s) URL or filesystem path.
        cache: For URLs, read from / write to ``cache_dir`` instead of
            refetching every time.
        timeout: HTTP timeout in seconds; -1 disables the timeout.
    """

    name: str
    location: str
    cache: bool = False
    timeout: float = DEFAULT_TIMEOUT
    cache_dir: Path = CACHE_DIR

    def __post_init__(self):
        is_not_none_or_empty(self.name, "name")
        is_not_none_or_empty(self.location, "location")
        satisfies(self.timeout, lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
                  "timeout", f"Timeout must be a number of seconds: {self.timeout!r}.")
        is_valid_timeout(self.timeout, "timeout")
        satisfies(self.cache, lambda v: isinstance(v, bool), "cache",
                  f"Cache flag must be true or false: {self.cache!r}.")

    @property
    def cache_path(self) -> Path:
        return Path(self.cache_dir) / f"{self.name}.html"

    def fetch(self) -> str:
        """Return the document's HTML.

        Raises:
            FileNotFoundError: Local file does not exist.
            requests.HTTPError: Remote server returned an error status.
        """
        if not is_url(self.location):
            path = Path(self.location)
            if not path.exists():
                raise FileNotFoundError(f"HTML file not found: {path}")
            logger.info(f"Reading {self.name} from {path}")
            return path.read_text(encoding="utf-8")

        if self.cache and self.cache_path.exists():
            logger.info(f"Loading {self.name} from cache: {self.cache_path}")
            return self.cache_path.read_text(encoding="utf-8")

        logger.info(f"Fetching {self.name} from {self.location}")
        timeout = None if self.timeout == -1 else self.timeout
        resp = requests.get(self.location, timeout=timeout, headers={"User-Agent": USER_AGENT})
        resp.raise_for_status()
        html = resp.text

        if self.cache:
            self.cache_path.parent.mkdir(parents=True, exist_ok=True)
            self.cache_path.write_text(html, encoding="utf-8")
            logger.info(f"Cached {self.name} to {self.cache_path}")

        return html


def source_from_location(location: str, cache: bool = False) -> HtmlSource:
    """Build an ad-hoc source from a CLI argument, naming it after the file/URL."""
    stem = location.rstrip("/").rsplit("/", 1)[-1] or "document"
    name = Path(stem).stem or "document"
    return HtmlSource(name=name, location=location, cache=cache)


def load_sources(config_path: Path | None = None) -> list[HtmlSource]:
    """Load source definitions from a YAML file.

    Args:
        config_path: YAML file with a top-level ``sources`` list.

    Returns:
        List of HtmlSource, in file order.

    Raises:
        FileNotFoundError: Config file does not exist.
        InvalidArgument: An entry is missing a name/location or has a bad timeout.
    """
    config_path = Path(config_path or DEFAULT_SOURCES_PATH)
    if not config_path.exists():
        raise FileNotFoundError(f"Sources file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise InvalidArgument("Sources file must be a mapping with a 'sources' list.",
                              "config_path", "assertion")

    sources = []
    for i, entry in enumerate(data.get("sources") or []):
        if not isinstance(entry, dict):
            raise InvalidArgument(f"Source entry {i} must be a mapping.", "sources", "assertion")
        sources.append(HtmlSource(
            name=entry.get("name"),
            location=entry.get("location"),
            cache=entry.get("cache", False),
            timeout=entry.get("timeout", DEFAULT_TIMEOUT),
        ))
        logger.debug(f"Loaded source: {entry.get('name')}")

    logger.info(f"Loaded {len(sources)} sources from {config_path}")
    return sources
