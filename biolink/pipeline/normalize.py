"""
Pipeline Stage 5: NORMALIZE — provider items → NormalizedProfile.

Field extraction is driven entirely by PlatformSpec.field_map; this module
only knows how to walk dotted paths and clean values.
"""
import logging
import math
import re
from typing import Any, Dict, Iterable, Optional, Sequence

from biolink.models.profile import NormalizedProfile, ProviderResult
from biolink.pipeline.classify import extract_emails
from biolink.platforms import PLATFORM_SPECS, extract_link_pages

logger = logging.getLogger('pipeline.normalize')

COUNT_FIELDS = ('follower_count', 'like_count')

_NEWLINES_RE = re.compile(r'\s*[\r\n]+\s*')


def get_path(data: Any, path: str) -> Any:
    """Walk a dotted path through nested dicts (and list indexes). None if any hop is missing."""
    current = data
    for part in path.split('.'):
        if isinstance(current, dict):
            current = current.get(part)
        elif isinstance(current, list) and part.isdigit() and int(part) < len(current):
            current = current[int(part)]
        else:
            return None
        if current is None:
            return None
    return current


def clean_text(value: Any) -> Optional[str]:
    """Single-line stripped string; non-strings and blanks become None."""
    if not isinstance(value, str):
        return None
    text = _NEWLINES_RE.sub(' ', value).strip()
    return text or None


def to_count(value: Any) -> Optional[int]:
    """Audience / like counts: ints, finite floats and '1,234' strings."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        digits = value.strip().replace(',', '')
        if digits.isdigit():
            return int(digits)
    return None


def _first_value(source: Dict, paths: Sequence[str], convert) -> Any:
    for path in paths:
        value = convert(get_path(source, path))
        if value is not None:
            return value
    return None


def _relevant_source(platform: str, items: Iterable[Any]) -> Optional[Dict]:
    """First item that carries the platform's root object (or the item itself)."""
    root = PLATFORM_SPECS[platform].root
    for item in items:
        if not isinstance(item, dict):
            continue
        source = get_path(item, root) if root else item
        if isinstance(source, dict):
            return source
    return None


def normalize_profile(platform: str, items: Optional[Sequence[Dict]]) -> Optional[NormalizedProfile]:
    """
    Map one provider's items into a NormalizedProfile.

    Returns None when there are no items or none of them has the platform's
    root field; never a half-empty placeholder.
    """
    if not items or platform not in PLATFORM_SPECS:
        return None

    source = _relevant_source(platform, items)
    if source is None:
        logger.info("%s: %d item(s) but none with usable profile data", platform, len(items))
        return None

    values = {}
    for field_name, paths in PLATFORM_SPECS[platform].field_map.items():
        convert = to_count if field_name in COUNT_FIELDS else clean_text
        values[field_name] = _first_value(source, paths, convert)

    profile = NormalizedProfile(platform=platform, **values)
    if profile.bio:
        profile.emails_found.update(extract_emails(profile.bio))
    profile.link_pages = extract_link_pages(profile.bio, profile.external_url)
    return profile


def normalize_results(results: Dict[str, ProviderResult]) -> Dict[str, Optional[NormalizedProfile]]:
    """Normalize every platform's result; failed / empty results map to None."""
    profiles: Dict[str, Optional[NormalizedProfile]] = {}
    for platform, result in results.items():
        profiles[platform] = None if result.failed else normalize_profile(platform, result.items)

    found = [p for p, prof in profiles.items() if prof]
    emails = sum(len(prof.emails_found) for prof in profiles.values() if prof)
    logger.info("Normalized %d profile(s), %d bio email(s)", len(found), emails,
                extra={'fields': {'profiles': found, 'bio_emails': emails}})
    return profiles
