"""
Provider request/result envelopes and the common per-platform profile shape.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from biolink.models.emails import EmailSet


@dataclass
class ProviderRequest:
    """
    Input for one platform's provider.

    values is either a list of usernames or a list of start URLs, depending
    on the platform; payload is the provider-specific run input built from it.
    """
    platform: str
    values: List[str] = field(default_factory=list)
    payload: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.values


@dataclass
class ProviderResult:
    """
    Raw items from one provider.

    items is None when the lookup failed, timed out, or had no provider;
    an empty list when the platform simply had nothing to look up.
    """
    platform: str
    items: Optional[List[Dict[str, Any]]] = None
    error: Optional[str] = None
    dispatched: bool = False

    @property
    def failed(self) -> bool:
        return self.items is None


@dataclass
class NormalizedProfile:
    """Best-effort common shape. Unknown fields stay None."""
    platform: str
    url: Optional[str] = None
    username: Optional[str] = None
    display_name: Optional[str] = None
    follower_count: Optional[int] = None
    like_count: Optional[int] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    country: Optional[str] = None
    external_url: Optional[str] = None
    emails_found: EmailSet = field(default_factory=EmailSet)
    link_pages: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'platform':       self.platform,
            'url':            self.url,
            'username':       self.username,
            'display_name':   self.display_name,
            'follower_count': self.follower_count,
            'like_count':     self.like_count,
            'bio':            self.bio,
            'location':       self.location,
            'country':        self.country,
            'external_url':   self.external_url,
            'emails_found':   self.emails_found.to_list(),
            'link_pages':     list(self.link_pages),
        }
