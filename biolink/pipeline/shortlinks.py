"""
Pipeline Stage 2: SHORT LINKS — expand shortened platform URLs.

TikTok share links (vm.tiktok.com/XYZ) carry no username; they are followed
to the canonical profile / video URL before identifiers are extracted.
youtu.be links are expanded too when the toggle is on.
"""
import logging
from typing import Callable, Dict, List, Optional, Sequence

from biolink.errors import ShortLinkResolutionFailure
from biolink.models.links import RawLink
from biolink.platforms import url_host

logger = logging.getLogger('pipeline.shortlinks')

# url → final url after redirects
Transport = Callable[[str], str]


class ShortLinkResolver:
    """
    Stateless resolver. One transport call per short link, no retry.

    Usage:
        resolver = ShortLinkResolver(RedirectTransport(), settings.short_link_hosts())
        links = resolver.expand(classified.social)
    """

    def __init__(self, transport: Optional[Transport],
                 hosts: Dict[str, Sequence[str]]):
        self.transport = transport
        self.hosts = {h.lower() for group in hosts.values() for h in group}

    def is_short_link(self, url: str) -> bool:
        return url_host(url) in self.hosts

    def resolve(self, url: str) -> str:
        """Final URL for a short link. Raises ShortLinkResolutionFailure."""
        if self.transport is None:
            raise ShortLinkResolutionFailure(url, 'no transport configured')
        try:
            final_url = self.transport(url)
        except Exception as e:
            raise ShortLinkResolutionFailure(url, str(e)) from e
        if not final_url or not isinstance(final_url, str):
            raise ShortLinkResolutionFailure(url, 'empty redirect target')
        return final_url

    def expand(self, links: Sequence[RawLink]) -> List[RawLink]:
        """
        Replace every short link with its resolved form.

        A link that fails to resolve is dropped; nothing else is affected.
        Without a transport, links pass through unchanged.
        """
        if self.transport is None or not self.hosts:
            return list(links)

        expanded: List[RawLink] = []
        failed = 0
        for link in links:
            if not self.is_short_link(link.url):
                expanded.append(link)
                continue
            try:
                final_url = self.resolve(link.url)
            except ShortLinkResolutionFailure as e:
                failed += 1
                logger.warning("%s", e)
                continue
            logger.info("Resolved %s → %s", link.url, final_url)
            expanded.append(RawLink(title=link.title, url=final_url))

        if failed:
            logger.info("%d short link(s) could not be resolved", failed,
                        extra={'fields': {'short_link_failures': failed}})
        return list(dict.fromkeys(expanded))
