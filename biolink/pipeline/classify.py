"""
Pipeline Stage 1: CLASSIFY — split scraped links into emails, social, other.
"""
import logging
from typing import Dict, Iterable, List, Optional

from biolink.errors import MalformedLinkError
from biolink.models.emails import EMAIL_RE, EmailSet, normalize_email
from biolink.models.links import ClassifiedLinks, RawLink
from biolink.pipeline.base import PipelineSettings
from biolink.platforms import PLATFORM_SPECS, url_host

logger = logging.getLogger('pipeline.classify')

# Regex hits that are really asset filenames (logo@2x.png)
BLOCKED_EMAIL_SUFFIXES = ('.png', '.jpg', '.jpeg', '.gif', '.webp', '.svg')

_DEFAULT_SETTINGS = PipelineSettings()


def extract_emails(text: str) -> List[str]:
    """All normalized emails in text, first-seen order, no duplicates."""
    if not text or not isinstance(text, str):
        return []
    found: Dict[str, None] = {}
    for match in EMAIL_RE.finditer(text):
        email = normalize_email(match.group(0))
        if email and not email.lower().endswith(BLOCKED_EMAIL_SUFFIXES):
            found.setdefault(email, None)
    return list(found)


def platform_for_url(url: str, settings: Optional[PipelineSettings] = None) -> Optional[str]:
    """Platform tag whose domain the URL's host belongs to, or None."""
    settings = settings or _DEFAULT_SETTINGS
    host = url_host(url)
    if not host:
        return None
    for platform in settings.platforms:
        spec = PLATFORM_SPECS.get(platform)
        if spec and spec.matches_host(host, settings.domains_for(platform)):
            return platform
    return None


def _require_url(link: RawLink) -> str:
    url = (link.url or '').strip() if isinstance(link.url, str) else ''
    if not url:
        raise MalformedLinkError(f"Link '{link.title}' has no url")
    return url


def _dedupe(links: Iterable[RawLink]) -> List[RawLink]:
    return list(dict.fromkeys(links))


def classify_links(links: Iterable[RawLink], page_text: str, emails: EmailSet,
                   settings: Optional[PipelineSettings] = None) -> ClassifiedLinks:
    """
    Partition scraped links.

    Page text seeds ``emails``. A link whose URL carries an email (mailto:
    anchors, hrefs with a literal address) adds that address to ``emails``
    and goes no further. Links without a URL are dropped. The rest land in
    ``social`` when their host belongs to a known platform, else ``other``;
    both buckets are deduplicated by (title, url) in first-seen order.

    ``emails`` is the only thing mutated.
    """
    settings = settings or _DEFAULT_SETTINGS
    emails.update(extract_emails(page_text))

    social: List[RawLink] = []
    other: List[RawLink] = []
    dropped = 0

    for link in links:
        try:
            url = _require_url(link)
        except MalformedLinkError:
            dropped += 1
            continue

        found = extract_emails(url)
        if found:
            emails.update(found)
            continue

        if url != link.url:
            link = RawLink(title=link.title, url=url)

        if platform_for_url(url, settings):
            social.append(link)
        else:
            other.append(link)

    result = ClassifiedLinks(social=_dedupe(social), other=_dedupe(other))
    logger.info(
        "Classified %d social, %d other links, %d emails (%d malformed dropped)",
        len(result.social), len(result.other), len(emails), dropped,
        extra={'fields': {
            'social_links': len(result.social),
            'other_links': len(result.other),
            'emails': len(emails),
            'malformed_links': dropped,
        }},
    )
    return result
