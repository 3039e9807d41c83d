"""
Website enrichment for work experience and education records.

Each record's organization name (company or institution) is normalized and
matched against a known-mapping table; records the table cannot resolve are
looked up through an external collaborator, concurrently, with a per-call
timeout. Enrichment only ever adds `website` to a copy of the record.

Table matching uses three rules per entry, in table order:
  exact equality, name contains key, key contains name.
The first entry satisfying any rule wins, which is not necessarily the best
match: short keys such as "edc" or "uw" can claim unrelated names.
"""

import logging
import re
import threading
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from typing import Dict, Iterator, List, Optional, Protocol, Sequence, Tuple, TypeVar, Union

from app.core.schemas import Education, WorkExperience

logger = logging.getLogger(__name__)

Record = TypeVar("Record", WorkExperience, Education)


class WebsiteLookup(Protocol):
    def find_website(self, name: str) -> Dict[str, str]:
        ...


# ============================================================================
# Known mappings
# ============================================================================

KNOWN_COMPANIES: Dict[str, str] = {
    "google": "https://www.google.com",
    "microsoft": "https://www.microsoft.com",
    "apple": "https://www.apple.com",
    "amazon": "https://www.amazon.com",
    "facebook": "https://www.facebook.com",
    "meta": "https://www.meta.com",
    "netflix": "https://www.netflix.com",
    "spotify": "https://www.spotify.com",
    "airbnb": "https://www.airbnb.com",
    "uber": "https://www.uber.com",
    "lyft": "https://www.lyft.com",
    "tesla": "https://www.tesla.com",
    "kaseya": "https://www.kaseya.com",
    "ainsworth game technology": "https://www.ainsworth.com.au",
    "ainsworth": "https://www.ainsworth.com.au",
    "ibm": "https://www.ibm.com",
    "oracle": "https://www.oracle.com",
    "salesforce": "https://www.salesforce.com",
    "adobe": "https://www.adobe.com",
    "intel": "https://www.intel.com",
    "nvidia": "https://www.nvidia.com",
    "amd": "https://www.amd.com",
    "cisco": "https://www.cisco.com",
    "vmware": "https://www.vmware.com",
    "red hat": "https://www.redhat.com",
    "redhat": "https://www.redhat.com",
    "mongodb": "https://www.mongodb.com",
    "atlassian": "https://www.atlassian.com",
    "slack": "https://slack.com",
    "zoom": "https://zoom.us",
    "dropbox": "https://www.dropbox.com",
    "github": "https://github.com",
    "gitlab": "https://gitlab.com",
    "bitbucket": "https://bitbucket.org",
    "jira": "https://www.atlassian.com/software/jira",
    "confluence": "https://www.atlassian.com/software/confluence",
    "first american title": "https://www.firstam.com",
    "first american": "https://www.firstam.com",
    "enterprise data concepts": "https://edcnow.com",
    "edc": "https://edcnow.com",
}

KNOWN_INSTITUTIONS: Dict[str, str] = {
    "university of louisiana at lafayette": "https://www.louisiana.edu",
    "ull": "https://www.louisiana.edu",
    "louisiana": "https://www.louisiana.edu",
    "harvard university": "https://www.harvard.edu",
    "harvard": "https://www.harvard.edu",
    "stanford university": "https://www.stanford.edu",
    "stanford": "https://www.stanford.edu",
    "mit": "https://www.mit.edu",
    "massachusetts institute of technology": "https://www.mit.edu",
    "university of california berkeley": "https://www.berkeley.edu",
    "uc berkeley": "https://www.berkeley.edu",
    "berkeley": "https://www.berkeley.edu",
    "university of texas at austin": "https://www.utexas.edu",
    "ut austin": "https://www.utexas.edu",
    "georgia institute of technology": "https://www.gatech.edu",
    "georgia tech": "https://www.gatech.edu",
    "carnegie mellon university": "https://www.cmu.edu",
    "carnegie mellon": "https://www.cmu.edu",
    "cmu": "https://www.cmu.edu",
    "university of washington": "https://www.washington.edu",
    "uw": "https://www.washington.edu",
    "university of michigan": "https://www.umich.edu",
    "umich": "https://www.umich.edu",
    "michigan": "https://www.umich.edu",
    "yale university": "https://www.yale.edu",
    "yale": "https://www.yale.edu",
    "princeton university": "https://www.princeton.edu",
    "princeton": "https://www.princeton.edu",
    "columbia university": "https://www.columbia.edu",
    "columbia": "https://www.columbia.edu",
    "university of pennsylvania": "https://www.upenn.edu",
    "upenn": "https://www.upenn.edu",
    "penn": "https://www.upenn.edu",
    "cornell university": "https://www.cornell.edu",
    "cornell": "https://www.cornell.edu",
    "caltech": "https://www.caltech.edu",
    "california institute of technology": "https://www.caltech.edu",
    "university of southern california": "https://www.usc.edu",
    "usc": "https://www.usc.edu",
    "new york university": "https://www.nyu.edu",
    "nyu": "https://www.nyu.edu",
}


def _clean_key(text: str) -> str:
    text = re.sub(r"[^\w\s]", "", text)
    return " ".join(text.split())


class CompanyEnrichmentData:
    """Company names: strip corporate suffixes and punctuation."""
    SUFFIX_RE = re.compile(r"\b(?:inc|corp|corporation|ltd|limited|llc|company|co)\b\.?")

    def known_mappings(self) -> Dict[str, str]:
        return KNOWN_COMPANIES

    def normalize_key(self, name: str) -> str:
        return _clean_key(self.SUFFIX_RE.sub("", name.lower()))

    def key_from(self, record: WorkExperience) -> str:
        return record.company


class EducationEnrichmentData:
    """Institution names: strip institutional words and punctuation."""
    SUFFIX_RE = re.compile(r"\b(?:university|college|institute|school)\b")

    def known_mappings(self) -> Dict[str, str]:
        return KNOWN_INSTITUTIONS

    def normalize_key(self, name: str) -> str:
        return _clean_key(self.SUFFIX_RE.sub("", name.lower()))

    def key_from(self, record: Education) -> str:
        return record.institution


EnrichmentData = Union[CompanyEnrichmentData, EducationEnrichmentData]


# ============================================================================
# Cache
# ============================================================================

class WebsiteCache:
    """
    Append-only normalized-name -> website map, seeded from a mapping table.

    Readers iterate a snapshot; inserts are serialized by a lock and never
    replace an existing key.
    """

    def __init__(self, seed: Optional[Dict[str, str]] = None):
        self._entries: Dict[str, str] = dict(seed or {})
        self._lock = threading.Lock()

    def items(self) -> Iterator[Tuple[str, str]]:
        with self._lock:
            snapshot = list(self._entries.items())
        return iter(snapshot)

    def add(self, key: str, website: str) -> None:
        if not key:
            return
        with self._lock:
            self._entries.setdefault(key, website)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries


def is_match(normalized_name: str, key: str) -> bool:
    return normalized_name == key or key in normalized_name or normalized_name in key


def find_in_mappings(normalized_name: str, entries) -> Optional[str]:
    """First entry (in insertion order) whose key matches; see module docstring."""
    if not normalized_name:
        return None
    for key, website in entries:
        if is_match(normalized_name, key):
            return website
    return None


# ============================================================================
# Enricher
# ============================================================================

class Enricher:
    """Attach websites to records of one kind (companies or institutions)."""

    def __init__(
        self,
        data: EnrichmentData,
        lookup: Optional[WebsiteLookup] = None,
        cache: Optional[WebsiteCache] = None,
        timeout: float = 5.0,
        max_workers: int = 4,
        entity_type: str = "organization",
    ):
        self.data = data
        self.lookup = lookup
        self.cache = cache if cache is not None else WebsiteCache(data.known_mappings())
        self.timeout = timeout
        self.max_workers = max_workers
        self.entity_type = entity_type

    def resolve_known(self, name: str) -> Optional[str]:
        normalized = self.data.normalize_key(name)
        website = find_in_mappings(normalized, self.cache.items())
        if website:
            logger.debug("Known %s match: '%s' -> %s", self.entity_type, normalized, website)
        return website

    def enrich(self, records: Sequence[Record]) -> List[Record]:
        out: List[Record] = list(records)
        unresolved: List[Tuple[int, str]] = []

        for i, record in enumerate(records):
            name = (self.data.key_from(record) or "").strip()
            if not name:
                continue
            website = self.resolve_known(name)
            if website:
                out[i] = record.model_copy(update={"website": website})
            elif self.lookup is not None:
                unresolved.append((i, name))

        if unresolved:
            for i, website in self._lookup_all(unresolved):
                out[i] = records[i].model_copy(update={"website": website})
        return out

    def _lookup_all(self, unresolved: List[Tuple[int, str]]) -> List[Tuple[int, str]]:
        found: List[Tuple[int, str]] = []
        executor = ThreadPoolExecutor(max_workers=min(self.max_workers, len(unresolved)))
        try:
            futures = [(i, name, executor.submit(self.lookup.find_website, name)) for i, name in unresolved]
            for i, name, future in futures:
                website = self._await_lookup(name, future)
                if website:
                    self.cache.add(self.data.normalize_key(name), website)
                    found.append((i, website))
        finally:
            # timed-out lookups are left to finish on their own
            executor.shutdown(wait=False, cancel_futures=True)
        return found

    def _await_lookup(self, name: str, future) -> Optional[str]:
        try:
            result = future.result(timeout=self.timeout) or {}
        except FutureTimeoutError:
            logger.warning("Website lookup for %s '%s' timed out after %.1fs", self.entity_type, name, self.timeout)
            return None
        except Exception as exc:
            logger.warning("Website lookup for %s '%s' failed: %s", self.entity_type, name, exc)
            return None

        website = result.get("website")
        if website:
            logger.debug("Lookup found website for '%s' -> %s", name, website)
        else:
            logger.debug("No website found for '%s'", name)
        return website or None


def build_enrichers(
    lookup: Optional[WebsiteLookup] = None,
    timeout: float = 5.0,
    max_workers: int = 4,
) -> Tuple[Enricher, Enricher]:
    """Company and education enrichers sharing one lookup collaborator."""
    companies = Enricher(CompanyEnrichmentData(), lookup, timeout=timeout, max_workers=max_workers, entity_type="company")
    institutions = Enricher(EducationEnrichmentData(), lookup, timeout=timeout, max_workers=max_workers, entity_type="institution")
    return companies, institutions
