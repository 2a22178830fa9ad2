"""
Pipeline Stage 7: ASSEMBLE — build the OutputRecord and its flat rendering.
"""
from typing import Any, Dict, List, Optional, Sequence

from biolink.config import PLATFORMS
from biolink.models.emails import EmailSet
from biolink.models.links import ClassifiedLinks, PageContent
from biolink.models.profile import NormalizedProfile
from biolink.models.record import OutputRecord


def assemble_record(page: PageContent,
                    links: ClassifiedLinks,
                    page_emails: EmailSet,
                    profiles: Dict[str, Optional[NormalizedProfile]],
                    emails: EmailSet,
                    primary_email: Optional[str],
                    top_platform: Optional[str],
                    provider_errors: Optional[Dict[str, str]] = None,
                    degraded: bool = False,
                    platforms: Sequence[str] = PLATFORMS) -> OutputRecord:
    """Pure data transformation. Every platform key is present, missing ones as None."""
    all_profiles = {p: profiles.get(p) for p in platforms}
    for platform, profile in profiles.items():
        all_profiles.setdefault(platform, profile)

    discovered: Dict[str, None] = {}
    for profile in all_profiles.values():
        if profile:
            for url in profile.link_pages:
                if url.rstrip('/') != (page.url or '').rstrip('/'):
                    discovered.setdefault(url, None)

    return OutputRecord(
        url=page.url,
        page_title=page.title,
        display_name=page.display_name,
        page_emails=page_emails.to_list(),
        links=links,
        profiles=all_profiles,
        emails=emails.to_list(),
        primary_email=primary_email,
        top_platform=top_platform,
        discovered_pages=list(discovered),
        provider_errors=dict(provider_errors or {}),
        degraded=degraded,
    )


def _join(values: List[str]) -> str:
    return ', '.join(values)


def to_flat_dict(record: OutputRecord) -> Dict[str, Any]:
    """
    Flat, single-level rendering for tabular exports.

    Keys: page fields, then ``<platform>_<field>`` for every platform, then
    the aggregate email columns.
    """
    flat: Dict[str, Any] = {
        'url':          record.url,
        'page_title':   record.page_title,
        'profile_name': record.display_name,
        'page_emails':  _join(record.page_emails),
        'social_links': _join([l.url for l in record.links.social]),
        'other_links':  _join([l.url for l in record.links.other]),
    }
    for platform, profile in record.profiles.items():
        flat[f'{platform}_url']          = profile.url if profile else None
        flat[f'{platform}_username']     = profile.username if profile else None
        flat[f'{platform}_name']         = profile.display_name if profile else None
        flat[f'{platform}_followers']    = profile.follower_count if profile else None
        flat[f'{platform}_likes']        = profile.like_count if profile else None
        flat[f'{platform}_bio']          = profile.bio if profile else None
        flat[f'{platform}_location']     = profile.location if profile else None
        flat[f'{platform}_country']      = profile.country if profile else None
        flat[f'{platform}_external_url'] = profile.external_url if profile else None
        flat[f'{platform}_emails']       = _join(profile.emails_found.to_list()) if profile else None
    flat.update({
        'all_emails':       _join(record.emails),
        'main_email':       record.primary_email,
        'top_platform':     record.top_platform,
        'discovered_pages': _join(record.discovered_pages),
        'degraded':         record.degraded,
    })
    return flat
