"""
OutputRecord — everything learned about one bio page.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from biolink.models.links import ClassifiedLinks
from biolink.models.profile import NormalizedProfile


@dataclass
class OutputRecord:
    url: str
    page_title: str = ''
    display_name: Optional[str] = None
    page_emails: List[str] = field(default_factory=list)
    links: ClassifiedLinks = field(default_factory=ClassifiedLinks)
    # One key per known platform; None = no data
    profiles: Dict[str, Optional[NormalizedProfile]] = field(default_factory=dict)
    emails: List[str] = field(default_factory=list)
    primary_email: Optional[str] = None
    top_platform: Optional[str] = None
    discovered_pages: List[str] = field(default_factory=list)
    provider_errors: Dict[str, str] = field(default_factory=dict)
    degraded: bool = False

    def profile(self, platform: str) -> Optional[NormalizedProfile]:
        return self.profiles.get(platform)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'url':              self.url,
            'page_title':       self.page_title,
            'display_name':     self.display_name,
            'page_emails':      list(self.page_emails),
            'social_links':     [{'title': l.title, 'url': l.url} for l in self.links.social],
            'other_links':      [{'title': l.title, 'url': l.url} for l in self.links.other],
            'profiles':         {p: (prof.to_dict() if prof else None)
                                 for p, prof in self.profiles.items()},
            'emails':           list(self.emails),
            'primary_email':    self.primary_email,
            'top_platform':     self.top_platform,
            'discovered_pages': list(self.discovered_pages),
            'provider_errors':  dict(self.provider_errors),
            'degraded':         self.degraded,
        }
