"""
External website lookup for organizations the known-mapping tables miss.

Three strategies are tried in order: a search-engine query, the bare
"<name>.com/.net/.org" domain, then a handful of name variations. A
candidate URL only counts once a HEAD request answers 2xx/3xx.
"""

import logging
import re
from typing import Dict, List, Optional
from urllib.parse import parse_qs, urlparse

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

COMMON_TLDS = ("com", "net", "org")
SKIP_DOMAINS = (
    "google.com", "facebook.com", "linkedin.com", "twitter.com",
    "youtube.com", "wikipedia.org", "crunchbase.com", "glassdoor.com",
)
SEARCH_CANDIDATES = 3


class WebsiteLookupService:
    """Resolve an organization name to its homepage. Never raises from find_website()."""

    def __init__(
        self,
        timeout: float = 5.0,
        search_url: str = "https://www.google.com/search",
        session: Optional[requests.Session] = None,
    ):
        self.timeout = timeout
        self.search_url = search_url
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
                          "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
        })

    def find_website(self, name: str) -> Dict[str, str]:
        """
        Returns {"website": url} when found, {} otherwise.
        """
        normalized = _normalize_name(name)
        if not normalized:
            return {}

        strategies = (
            self._try_search_engine,
            self._try_direct_domain,
            self._try_domain_variations,
        )
        for strategy in strategies:
            try:
                website = strategy(normalized)
            except (requests.RequestException, ValueError) as exc:
                logger.debug("%s failed for '%s': %s", strategy.__name__, normalized, exc)
                continue
            if website:
                logger.info("Found website for '%s': %s", name, website)
                return {"website": website}

        logger.debug("No website found for '%s'", name)
        return {}

    # ------------------------------------------------------------------
    # strategies
    # ------------------------------------------------------------------

    def _try_search_engine(self, normalized: str) -> Optional[str]:
        response = self.session.get(
            self.search_url,
            params={"q": f"{normalized} official website", "num": 5},
            timeout=self.timeout,
        )
        response.raise_for_status()

        candidates = [
            url for url in extract_result_urls(response.text)
            if is_likely_company_website(url, normalized)
        ]
        for url in candidates[:SEARCH_CANDIDATES]:
            if self.is_valid_website(url):
                return url
        return None

    def _try_direct_domain(self, normalized: str) -> Optional[str]:
        return self._first_valid([normalized.replace(" ", "")])

    def _try_domain_variations(self, normalized: str) -> Optional[str]:
        words = normalized.split()
        variations = [
            "".join(words),
            "-".join(words),
            words[0],
            "".join(words[:2]),
        ]
        # keep order, drop repeats
        return self._first_valid(list(dict.fromkeys(variations)))

    def _first_valid(self, labels: List[str]) -> Optional[str]:
        for label in labels:
            for tld in COMMON_TLDS:
                url = f"https://{label}.{tld}"
                if self.is_valid_website(url):
                    return url
        return None

    def is_valid_website(self, url: str) -> bool:
        try:
            response = self.session.head(url, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException:
            return False
        return 200 <= response.status_code < 400


def _normalize_name(name: str) -> str:
    t = (name or "").lower()
    t = re.sub(r"\b(?:inc|corp|corporation|ltd|limited|llc|company|co)\b\.?", "", t)
    t = re.sub(r"[^\w\s]", "", t)
    return " ".join(t.split())


def extract_result_urls(html: str) -> List[str]:
    """Pull outbound result links ("/url?q=<target>&...") from a search results page."""
    soup = BeautifulSoup(html, "html.parser")
    urls: List[str] = []
    for a in soup.find_all("a", href=True):
        href = a["href"]
        if href.startswith("/url?"):
            target = parse_qs(urlparse(href).query).get("q", [""])[0]
        else:
            target = href
        if target.startswith(("http://", "https://")):
            urls.append(target)
    return urls


def is_likely_company_website(url: str, normalized_name: str) -> bool:
    """Domain must not be an aggregator and should share a word with the name."""
    hostname = (urlparse(url).hostname or "").lower()
    if not hostname or any(d in hostname for d in SKIP_DOMAINS):
        return False

    main_domain = hostname.replace("www.", "").split(".")[0]
    for word in normalized_name.split():
        if len(word) > 2 and (word in main_domain or main_domain in word):
            return True

    compact_name = re.sub(r"[^a-z0-9]", "", normalized_name)
    compact_domain = re.sub(r"[^a-z0-9]", "", main_domain)
    return bool(compact_domain) and (compact_name in compact_domain or compact_domain in compact_name)
