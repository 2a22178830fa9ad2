"""
Pipeline Stage 3: IDENTIFIERS — per-platform provider input from social links.

Username platforms (instagram, tiktok, twitch, snapchat) are reduced to the
handle captured by the platform pattern. Start-URL platforms (twitter,
youtube) pass matching URLs through verbatim; twitter URLs are repeated
``url_replication`` times because the tweet scraper returns more stable
author data when fed the same URL several times.
"""
import logging
from typing import Dict, Iterable, List, Optional

from biolink.models.links import RawLink
from biolink.models.profile import ProviderRequest
from biolink.pipeline.base import PipelineSettings
from biolink.pipeline.classify import platform_for_url
from biolink.platforms import PLATFORM_SPECS, START_URLS, get_spec

logger = logging.getLogger('pipeline.identifiers')


def extract_username(url: str, platform: str) -> Optional[str]:
    """Handle captured from a profile URL, or None if the URL doesn't fit."""
    spec = get_spec(platform)
    m = spec.username_re.search(url or '')
    if not m:
        return None
    handle = m.group(1).strip()
    if not handle or handle.lower() in spec.reserved:
        return None
    return handle


def extract_usernames(links: Iterable[RawLink], platform: str) -> List[str]:
    """Unique handles for a platform, in link order. Non-matching links are skipped."""
    usernames: Dict[str, None] = {}
    for link in links:
        username = extract_username(link.url, platform) if link and link.url else None
        if username:
            usernames.setdefault(username, None)
    return list(usernames)


def collect_start_urls(links: Iterable[RawLink], platform: str,
                       replication: int = 1) -> List[str]:
    """Matching URLs verbatim, each repeated ``replication`` times."""
    spec = get_spec(platform)
    urls: Dict[str, None] = {}
    for link in links:
        if link and link.url and spec.username_re.search(link.url):
            urls.setdefault(link.url, None)
    times = max(1, replication)
    return [url for url in urls for _ in range(times)]


def build_provider_requests(social_links: Iterable[RawLink],
                            settings: Optional[PipelineSettings] = None) -> Dict[str, ProviderRequest]:
    """
    Group social links by platform and build one ProviderRequest per platform.

    Every configured platform gets an entry; platforms whose links yielded no
    identifier get an empty request (skipped by the dispatcher).
    """
    settings = settings or PipelineSettings()

    by_platform: Dict[str, List[RawLink]] = {p: [] for p in settings.platforms}
    for link in social_links:
        platform = platform_for_url(link.url, settings)
        if platform:
            by_platform[platform].append(link)

    requests: Dict[str, ProviderRequest] = {}
    for platform, links in by_platform.items():
        spec = PLATFORM_SPECS.get(platform)
        if not spec:
            continue
        if spec.input_mode == START_URLS:
            replication = settings.url_replication if spec.replicate_urls else 1
            values = collect_start_urls(links, platform, replication)
        else:
            values = extract_usernames(links, platform)

        requests[platform] = ProviderRequest(
            platform=platform,
            values=values,
            payload=spec.build_input(values) if values else {},
        )

    active = {p: len(r.values) for p, r in requests.items() if r.values}
    logger.info("Provider input built for %d platform(s): %s", len(active), active,
                extra={'fields': {'provider_inputs': active}})
    return requests
