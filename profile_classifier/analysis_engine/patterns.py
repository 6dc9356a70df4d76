"""
Text pattern catalog and scanner for automated-looking profile text.

The catalog is data, not control flow: an ordered list of tagged regex
entries plus an allow-list of demo markers and the professional keyword
list. It is built once (defaults or a JSON override) and treated as
read-only afterwards, so it can be shared freely across threads.

Scanning runs four checks and any positive makes the text suspicious:
  1. allow-list markers short-circuit to "not suspicious"
  2. catalog regexes (generic names/titles, boilerplate bios, fake companies)
  3. very short name (< 3 chars) or title (< 5 chars)
  4. repeated characters or alphabet-run-plus-digits in name or title
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Iterable

from profile_classifier.core.exceptions import CatalogError
from profile_classifier.profile_logging import Observer, get_logger, resolve_observer

logger = get_logger(__name__)

CATEGORY_GENERIC_NAME = "generic_name"
CATEGORY_GENERIC_TITLE = "generic_title"
CATEGORY_BOILERPLATE_BIO = "boilerplate_bio"
CATEGORY_FAKE_COMPANY = "fake_company"
CATEGORY_CUSTOM = "custom"

# Length heuristic
MIN_NAME_LENGTH = 3
MIN_TITLE_LENGTH = 5
# Repetition heuristic only looks at text at least this long
MIN_REPETITION_TEXT_LENGTH = 5

FINDING_SHORT_NAME = "short_name"
FINDING_SHORT_TITLE = "short_title"
FINDING_REPEATED_NAME = "repeated_name"
FINDING_REPEATED_TITLE = "repeated_title"

_REPEATED_CHAR_RE = re.compile(r"(.)\1{3,}")
_SEQUENTIAL_RE = re.compile(r"(?:abc|def|ghi|jkl|mno|pqr|stu|vwx|yz)\d+", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class PatternEntry:
    """One catalog regex, tagged with what it detects."""

    category: str
    pattern: str

    def to_dict(self) -> dict[str, Any]:
        return {"category": self.category, "pattern": self.pattern}


DEFAULT_PATTERNS: tuple[PatternEntry, ...] = (
    PatternEntry(CATEGORY_GENERIC_NAME, r"^user\d+$"),
    PatternEntry(CATEGORY_GENERIC_NAME, r"^test\s+user"),
    PatternEntry(CATEGORY_GENERIC_NAME, r"^demo\s+account"),
    PatternEntry(CATEGORY_GENERIC_NAME, r"^bot\d+$"),
    PatternEntry(CATEGORY_GENERIC_NAME, r"^ai\s+assistant$"),
    PatternEntry(CATEGORY_GENERIC_NAME, r"^automated\s+user$"),
    PatternEntry(CATEGORY_GENERIC_TITLE, r"^software engineer$"),
    PatternEntry(CATEGORY_GENERIC_TITLE, r"^developer$"),
    PatternEntry(CATEGORY_GENERIC_TITLE, r"^consultant$"),
    PatternEntry(CATEGORY_GENERIC_TITLE, r"^freelancer$"),
    PatternEntry(CATEGORY_BOILERPLATE_BIO, r"^$"),
    PatternEntry(CATEGORY_BOILERPLATE_BIO, r"^looking for opportunities$"),
    PatternEntry(CATEGORY_BOILERPLATE_BIO, r"^open to new opportunities$"),
    PatternEntry(CATEGORY_BOILERPLATE_BIO, r"^seeking new challenges$"),
    PatternEntry(CATEGORY_FAKE_COMPANY, r"^test company$"),
    PatternEntry(CATEGORY_FAKE_COMPANY, r"^demo corp$"),
    PatternEntry(CATEGORY_FAKE_COMPANY, r"^sample inc$"),
)

# Markers of the detector's own demo/test pages; never flag those
DEFAULT_ALLOW_MARKERS: tuple[str, ...] = (
    "linkedin ai detector",
    "test profiles",
    "\U0001F916",
)

DEFAULT_PROFESSIONAL_KEYWORDS: tuple[str, ...] = (
    "manager",
    "director",
    "senior",
    "lead",
    "principal",
    "head of",
    "ceo",
    "cto",
    "cfo",
    "vp",
    "vice president",
    "president",
    "engineer",
    "developer",
    "architect",
    "consultant",
    "specialist",
    "analyst",
    "coordinator",
    "supervisor",
    "executive",
)


def _compile_entry(entry: PatternEntry, source: str | None = None) -> re.Pattern[str]:
    try:
        return re.compile(entry.pattern, re.IGNORECASE)
    except re.error as e:
        raise CatalogError(f"Invalid pattern {entry.pattern!r}: {e}", source=source) from e


@dataclass(frozen=True)
class PatternCatalog:
    """
    Read-only catalog of suspicious patterns, allow markers and professional keywords.

    Regexes are compiled once at construction; an invalid entry raises
    CatalogError there, never during a scan.
    """

    entries: tuple[PatternEntry, ...] = DEFAULT_PATTERNS
    allow_markers: tuple[str, ...] = DEFAULT_ALLOW_MARKERS
    professional_keywords: tuple[str, ...] = DEFAULT_PROFESSIONAL_KEYWORDS
    source: str | None = None
    """File the catalog was loaded from; None for the built-in defaults."""
    _compiled: tuple[re.Pattern[str], ...] = field(
        init=False, repr=False, compare=False, default=()
    )

    def __post_init__(self) -> None:
        compiled = tuple(_compile_entry(e, self.source) for e in self.entries)
        object.__setattr__(self, "_compiled", compiled)
        object.__setattr__(self, "allow_markers", tuple(m.lower() for m in self.allow_markers))
        object.__setattr__(
            self,
            "professional_keywords",
            tuple(k.lower() for k in self.professional_keywords),
        )

    @classmethod
    def default(cls) -> PatternCatalog:
        return DEFAULT_CATALOG

    def with_custom_patterns(self, patterns: Iterable[str]) -> PatternCatalog:
        """
        Return a copy with user-supplied regexes appended as "custom" entries.

        Custom patterns are matched against the combined text. Invalid ones
        are skipped with a warning rather than failing the whole catalog.
        """
        extra = tuple(PatternEntry(CATEGORY_CUSTOM, p) for p in compilable_patterns(patterns))
        if not extra:
            return self
        return replace(self, entries=self.entries + extra)

    def is_allow_listed(self, combined_text: str) -> bool:
        lowered = combined_text.lower()
        return any(marker in lowered for marker in self.allow_markers)

    def matching_entries(self, combined_text: str) -> list[PatternEntry]:
        """Catalog entries that fire on the whitespace-collapsed combined text, in catalog order."""
        text = collapse_text(combined_text)
        return [entry for entry, regex in zip(self.entries, self._compiled) if regex.search(text)]

    def has_professional_indicators(self, title: str, description: str) -> bool:
        text = f"{title} {description}".lower()
        return any(keyword in text for keyword in self.professional_keywords)

    def to_dict(self) -> dict[str, Any]:
        return {
            "patterns": [e.to_dict() for e in self.entries],
            "allow_markers": list(self.allow_markers),
            "professional_keywords": list(self.professional_keywords),
        }


DEFAULT_CATALOG = PatternCatalog()


def collapse_text(text: str) -> str:
    """Collapse runs of whitespace and strip the ends."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def compilable_patterns(patterns: Iterable[str | None], observer: Observer | None = None) -> tuple[str, ...]:
    """Stripped, non-empty patterns that compile; the rest are dropped with a custom_pattern_invalid warning."""
    log = resolve_observer(observer, logger)
    valid: list[str] = []
    for raw in patterns:
        pattern = (raw or "").strip()
        if not pattern:
            continue
        try:
            re.compile(pattern)
        except re.error as e:
            log.warning("custom_pattern_invalid", pattern=pattern, error=str(e))
            continue
        valid.append(pattern)
    return tuple(valid)


def has_repeated_patterns(text: str) -> bool:
    """
    True for a character repeated 4+ times ("aaaa") or an alphabet run
    followed by digits ("abc123"). Text shorter than 5 characters never fires.
    """
    if not text or len(text) < MIN_REPETITION_TEXT_LENGTH:
        return False
    return bool(_REPEATED_CHAR_RE.search(text) or _SEQUENTIAL_RE.search(text))


def has_professional_indicators(
    title: str,
    description: str,
    catalog: PatternCatalog | None = None,
) -> bool:
    """Case-insensitive keyword check over title and description."""
    return (catalog or DEFAULT_CATALOG).has_professional_indicators(title, description)


def text_findings(
    name: str,
    title: str,
    description: str = "",
    *,
    catalog: PatternCatalog | None = None,
) -> list[str]:
    """
    Return what made the profile text look automated, or [] if nothing did.

    Findings are catalog categories plus short_name / short_title /
    repeated_name / repeated_title, in check order. Allow-listed text
    always returns [].
    """
    catalog = catalog or DEFAULT_CATALOG
    combined = f"{name} {title} {description}"
    if catalog.is_allow_listed(combined):
        return []

    findings: list[str] = []
    for entry in catalog.matching_entries(combined):
        if entry.category not in findings:
            findings.append(entry.category)
    if len(name) < MIN_NAME_LENGTH:
        findings.append(FINDING_SHORT_NAME)
    if len(title) < MIN_TITLE_LENGTH:
        findings.append(FINDING_SHORT_TITLE)
    if has_repeated_patterns(name):
        findings.append(FINDING_REPEATED_NAME)
    if has_repeated_patterns(title):
        findings.append(FINDING_REPEATED_TITLE)
    return findings


def scan_profile_text(
    name: str,
    title: str,
    description: str = "",
    *,
    catalog: PatternCatalog | None = None,
) -> bool:
    """True if the profile text looks generic or automated."""
    return bool(text_findings(name, title, description, catalog=catalog))


def _entry_from_json(raw: Any, source: str) -> PatternEntry:
    if isinstance(raw, str):
        return PatternEntry(CATEGORY_CUSTOM, raw)
    if not isinstance(raw, dict) or not isinstance(raw.get("pattern"), str):
        raise CatalogError(f"Catalog pattern entry must be a string or an object with 'pattern': {raw!r}", source=source)
    return PatternEntry(
        category=str(raw.get("category") or CATEGORY_CUSTOM),
        pattern=raw["pattern"],
    )


def _string_list(data: dict[str, Any], key: str, source: str) -> tuple[str, ...] | None:
    if key not in data:
        return None
    value = data[key]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise CatalogError(f"Catalog key {key!r} must be a list of strings", source=source)
    return tuple(value)


def load_catalog(path: str | Path, observer: Observer | None = None) -> PatternCatalog:
    """
    Load a catalog override from JSON.

    Shape: {"patterns": [...], "allow_markers": [...], "professional_keywords": [...]};
    any key left out keeps the built-in default. A missing or unreadable
    file logs a warning and returns the defaults. Malformed content raises
    CatalogError. Load events go to observer, or to this module's logger.
    """
    log = resolve_observer(observer, logger)
    path = Path(path)
    source = str(path)
    if not path.is_file():
        log.warning("catalog_override_missing", path=source)
        return DEFAULT_CATALOG
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        log.warning("catalog_override_unreadable", path=source, error=str(e))
        return DEFAULT_CATALOG
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog is not valid JSON: {e}", source=source) from e
    if not isinstance(data, dict):
        raise CatalogError("Catalog must be a JSON object", source=source)

    patterns = data.get("patterns")
    if patterns is None:
        entries = DEFAULT_PATTERNS
    elif isinstance(patterns, list):
        entries = tuple(_entry_from_json(p, source) for p in patterns)
    else:
        raise CatalogError("Catalog key 'patterns' must be a list", source=source)

    allow_markers = _string_list(data, "allow_markers", source)
    keywords = _string_list(data, "professional_keywords", source)
    catalog = PatternCatalog(
        entries=entries,
        allow_markers=DEFAULT_ALLOW_MARKERS if allow_markers is None else allow_markers,
        professional_keywords=DEFAULT_PROFESSIONAL_KEYWORDS if keywords is None else keywords,
        source=source,
    )
    log.info(
        "catalog_loaded",
        path=source,
        pattern_count=len(catalog.entries),
        allow_marker_count=len(catalog.allow_markers),
        keyword_count=len(catalog.professional_keywords),
    )
    return catalog
