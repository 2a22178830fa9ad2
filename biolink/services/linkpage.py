"""
Static bio-page adapter — already-fetched HTML → PageContent.

Reads the two anchor groups a link-in-bio page exposes (the social icon row
and the featured link buttons) plus the title, display name and visible
text. No fetching, no JavaScript; the caller supplies the HTML.
"""
import logging
from typing import List

from bs4 import BeautifulSoup

from biolink.models.links import PageContent, RawLink

logger = logging.getLogger('services.linkpage')

SOCIAL_ICON_SELECTOR = 'a[data-testid="SocialIcon"]'
LINK_BUTTON_SELECTOR = 'a[data-testid="LinkButton"]'
DISPLAY_NAME_SELECTOR = 'h1'


def _anchor_title(a) -> str:
    return (a.get('title') or a.get('aria-label') or a.get_text(' ', strip=True) or '').strip()


def _anchors(soup, selector: str) -> List[RawLink]:
    return [RawLink(title=_anchor_title(a), url=a.get('href')) for a in soup.select(selector)]


def parse_link_page(html: str, url: str,
                    social_selector: str = SOCIAL_ICON_SELECTOR,
                    button_selector: str = LINK_BUTTON_SELECTOR) -> PageContent:
    """Parse a bio page's HTML into PageContent."""
    soup = BeautifulSoup(html or '', 'html.parser')

    title = soup.title.get_text(strip=True) if soup.title else ''
    name_tag = soup.select_one(DISPLAY_NAME_SELECTOR)
    display_name = name_tag.get_text(' ', strip=True) if name_tag else None

    social_links = _anchors(soup, social_selector)
    featured_links = _anchors(soup, button_selector)

    for tag in soup(['script', 'style', 'noscript']):
        tag.decompose()
    body = soup.body or soup
    text = body.get_text('\n', strip=True)

    logger.info("Parsed %s: %d social icon(s), %d link button(s)",
                url, len(social_links), len(featured_links))
    return PageContent(
        url=url,
        title=title,
        display_name=display_name or None,
        social_links=social_links,
        featured_links=featured_links,
        text=text,
    )
