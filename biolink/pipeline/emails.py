"""
Pipeline Stage 6: EMAILS — merge every email source and rank them.

Precedence: page-level emails first, then platform bios in the configured
email priority order, then any platform missing from that list.
"""
import logging
from typing import Dict, Iterable, List, Optional, Sequence

from biolink.models.emails import EmailSet
from biolink.models.profile import NormalizedProfile

logger = logging.getLogger('pipeline.emails')


def _ordered_platforms(profiles: Dict[str, Optional[NormalizedProfile]],
                       priority: Sequence[str]) -> List[str]:
    ranked = [p for p in priority if p in profiles]
    return ranked + [p for p in profiles if p not in ranked]


def _candidates(page_emails: Iterable[str],
                profiles: Dict[str, Optional[NormalizedProfile]],
                priority: Sequence[str]) -> Iterable[str]:
    yield from page_emails
    for platform in _ordered_platforms(profiles, priority):
        profile = profiles.get(platform)
        if profile:
            yield from profile.emails_found


def aggregate_emails(page_emails: EmailSet,
                     profiles: Dict[str, Optional[NormalizedProfile]],
                     priority: Sequence[str]) -> EmailSet:
    """Union of page emails and every profile's emails_found, precedence order."""
    return EmailSet(_candidates(page_emails, profiles, priority))


def select_primary_email(page_emails: EmailSet,
                         profiles: Dict[str, Optional[NormalizedProfile]],
                         priority: Sequence[str],
                         aggregate: Optional[EmailSet] = None) -> Optional[str]:
    """
    First email in precedence order, or None.

    Pass the result of aggregate_emails() as ``aggregate`` to skip rebuilding it.
    """
    if aggregate is None:
        aggregate = aggregate_emails(page_emails, profiles, priority)
    return aggregate.first()


def select_top_platform(profiles: Dict[str, Optional[NormalizedProfile]],
                        priority: Sequence[str]) -> Optional[str]:
    """
    Platform with the largest follower count.

    Ties go to the platform listed first in ``priority``; profiles without a
    count are ignored. None when no profile has a count.
    """
    best, best_count = None, None
    for platform in _ordered_platforms(profiles, priority):
        profile = profiles.get(platform)
        if not profile or profile.follower_count is None:
            continue
        if best_count is None or profile.follower_count > best_count:
            best, best_count = platform, profile.follower_count
    return best
