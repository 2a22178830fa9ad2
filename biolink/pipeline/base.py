"""
Pipeline contracts shared by every stage.

PipelineSettings carries the caller-tunable knobs (priority lists, toggles,
deadline). Stages receive it explicitly; nothing reads module globals at
call time except PipelineSettings.from_config().
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from biolink.config import DISPATCH_TIMEOUT_SECS, PLATFORMS
from biolink.platforms import PLATFORM_SPECS


@dataclass
class PipelineSettings:
    email_priority: List[str] = field(default_factory=lambda: list(PLATFORMS))
    top_platform_priority: List[str] = field(default_factory=lambda: list(PLATFORMS))
    url_replication: int = 5
    recognize_x_domain: bool = True
    expand_youtube_short_links: bool = False
    dispatch_timeout: Optional[float] = None
    platforms: List[str] = field(default_factory=lambda: list(PLATFORMS))

    @classmethod
    def from_config(cls, **overrides) -> 'PipelineSettings':
        """Build settings from env + enrichment_config.yaml; kwargs win."""
        from biolink.pipeline.enrichment_config import (
            get_email_priority, get_top_platform_priority,
            get_url_replication, get_toggle,
        )
        values = dict(
            email_priority=get_email_priority(),
            top_platform_priority=get_top_platform_priority(),
            url_replication=get_url_replication(),
            recognize_x_domain=get_toggle('recognize_x_domain', True),
            expand_youtube_short_links=get_toggle('expand_youtube_short_links', False),
            dispatch_timeout=DISPATCH_TIMEOUT_SECS,
        )
        values.update(overrides)
        return cls(**values)

    def domains_for(self, platform: str) -> Tuple[str, ...]:
        """Domain tokens recognized for a platform under the current toggles."""
        domains = PLATFORM_SPECS[platform].domains
        if platform == 'twitter' and not self.recognize_x_domain:
            domains = tuple(d for d in domains if d != 'x.com')
        return domains

    def short_link_hosts(self) -> Dict[str, Tuple[str, ...]]:
        """platform → hosts whose links must be expanded before extraction."""
        hosts = {}
        for platform in self.platforms:
            spec = PLATFORM_SPECS.get(platform)
            if not spec or not spec.short_hosts:
                continue
            if platform == 'youtube' and not self.expand_youtube_short_links:
                continue
            hosts[platform] = spec.short_hosts
        return hosts
