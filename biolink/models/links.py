"""
Scraped page data and the classifier's output buckets.
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class RawLink:
    """One anchor as scraped. ``url`` may be empty or malformed."""
    title: str = ''
    url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'RawLink':
        return cls(title=(data.get('title') or ''), url=data.get('url'))


@dataclass
class ClassifiedLinks:
    """Deduplicated social / other links, first-seen order."""
    social: List[RawLink] = field(default_factory=list)
    other: List[RawLink] = field(default_factory=list)


@dataclass
class PageContent:
    """
    Static data extracted from one bio page.

    social_links are the icon-row anchors, featured_links the link buttons.
    """
    url: str
    title: str = ''
    display_name: Optional[str] = None
    social_links: List[RawLink] = field(default_factory=list)
    featured_links: List[RawLink] = field(default_factory=list)
    text: str = ''

    @property
    def links(self) -> List[RawLink]:
        return list(self.social_links) + list(self.featured_links)

    @classmethod
    def from_dict(cls, data: dict) -> 'PageContent':
        return cls(
            url=data.get('url', ''),
            title=data.get('title') or data.get('pageTitle') or '',
            display_name=data.get('display_name') or data.get('profileName'),
            social_links=[RawLink.from_dict(l) for l in data.get('social_links') or []],
            featured_links=[RawLink.from_dict(l) for l in data.get('featured_links') or []],
            text=data.get('text') or '',
        )
