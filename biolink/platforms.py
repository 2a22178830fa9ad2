"""
Platform table — domain tokens, username patterns, provider actors and
response field mappings for every supported social platform.

Everything the pipeline knows about a platform lives here. Stages look up a
PlatformSpec by tag instead of carrying their own regexes.
"""
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Pattern, Sequence, Tuple
from urllib.parse import urlparse

# Input modes
USERNAMES = 'usernames'
START_URLS = 'start_urls'

# Link aggregators a provider bio may point back to
LINK_AGGREGATORS = [
    'linktr.ee', 'beacons.ai', 'linkin.bio', 'linkpop.com',
    'hoo.be', 'campsite.bio', 'lnk.bio', 'tap.bio', 'solo.to',
    'bio.link', 'carrd.co',
]

_LINK_PAGE_RE = re.compile(
    r'(?:https?://)?(?:www\.)?(?:' + '|'.join(re.escape(h) for h in LINK_AGGREGATORS) + r')/[^\s/?#"\'<>]+',
    re.I,
)


@dataclass(frozen=True)
class PlatformSpec:
    """
    Static description of one platform.

    field_map maps a NormalizedProfile field to one or more dotted paths,
    relative to ``root`` when set; the first path that yields a value wins.
    """
    tag: str
    domains: Tuple[str, ...]
    username_re: Pattern
    input_mode: str
    actor_id: str
    input_key: str
    input_defaults: Dict = field(default_factory=dict)
    url_objects: bool = False
    replicate_urls: bool = False
    reserved: Tuple[str, ...] = ()
    short_hosts: Tuple[str, ...] = ()
    root: Optional[str] = None
    field_map: Dict[str, Tuple[str, ...]] = field(default_factory=dict)

    def matches_host(self, host: str, domains: Sequence[str] = None) -> bool:
        host = (host or '').lower()
        domains = self.domains if domains is None else domains
        return any(host == d or host.endswith('.' + d) for d in domains)

    def build_input(self, values: List[str]) -> Dict:
        """Provider-specific run input for a list of usernames / URLs."""
        items = [{'url': v} for v in values] if self.url_objects else list(values)
        payload = {self.input_key: items}
        payload.update(self.input_defaults)
        return payload


PLATFORM_SPECS: Dict[str, PlatformSpec] = {
    'instagram': PlatformSpec(
        tag='instagram',
        domains=('instagram.com',),
        username_re=re.compile(r'instagram\.com/([^/?#]+)', re.I),
        input_mode=USERNAMES,
        actor_id='apify~instagram-profile-scraper',
        input_key='usernames',
        input_defaults={'resultsLimit': 1},
        reserved=('p', 'reel', 'reels', 'stories', 'explore', 'tv', 'accounts'),
        field_map={
            'url':            ('url', 'inputUrl'),
            'username':       ('username',),
            'display_name':   ('fullName',),
            'follower_count': ('followersCount',),
            'bio':            ('biography',),
            'external_url':   ('externalUrl',),
        },
    ),
    'tiktok': PlatformSpec(
        tag='tiktok',
        domains=('tiktok.com',),
        username_re=re.compile(r'tiktok\.com/@([^/?#]+)', re.I),
        input_mode=USERNAMES,
        actor_id='clockworks~tiktok-profile-scraper',
        input_key='profiles',
        input_defaults={'resultsPerPage': 1},
        short_hosts=('vm.tiktok.com', 'vt.tiktok.com'),
        root='authorMeta',
        field_map={
            'url':            ('profileUrl',),
            'username':       ('name',),
            'display_name':   ('nickName',),
            'follower_count': ('fans',),
            'like_count':     ('heart',),
            'bio':            ('signature',),
            'country':        ('region',),
            'external_url':   ('bioLink.link', 'bioLink'),
        },
    ),
    'twitter': PlatformSpec(
        tag='twitter',
        domains=('twitter.com', 'x.com'),
        username_re=re.compile(r'(?:twitter|x)\.com/([^/?#]+)', re.I),
        input_mode=START_URLS,
        actor_id='apidojo~tweet-scraper',
        input_key='startUrls',
        input_defaults={'maxItems': 5},
        replicate_urls=True,
        reserved=('home', 'search', 'explore', 'notifications', 'messages',
                  'i', 'intent', 'hashtag', 'share'),
        root='author',
        field_map={
            'url':            ('url', 'twitterUrl'),
            'username':       ('userName',),
            'display_name':   ('name',),
            'follower_count': ('followers',),
            'like_count':     ('favouritesCount',),
            'bio':            ('description', 'profile_bio.description'),
            'location':       ('location',),
        },
    ),
    'youtube': PlatformSpec(
        tag='youtube',
        domains=('youtube.com', 'youtu.be'),
        username_re=re.compile(r'(?:youtube\.com|youtu\.be)/([^/?#]+)', re.I),
        input_mode=START_URLS,
        actor_id='streamers~youtube-scraper',
        input_key='startUrls',
        input_defaults={'maxResults': 1},
        url_objects=True,
        short_hosts=('youtu.be',),
        field_map={
            'url':            ('channelUrl', 'aboutChannelInfo.channelUrl', 'inputChannelUrl'),
            'username':       ('channelUsername', 'aboutChannelInfo.channelUsername'),
            'display_name':   ('channelName', 'aboutChannelInfo.channelName'),
            'follower_count': ('numberOfSubscribers', 'aboutChannelInfo.numberOfSubscribers'),
            'bio':            ('channelDescription', 'aboutChannelInfo.channelDescription'),
            'location':       ('channelLocation', 'aboutChannelInfo.channelLocation'),
        },
    ),
    'twitch': PlatformSpec(
        tag='twitch',
        domains=('twitch.tv',),
        username_re=re.compile(r'twitch\.tv/([^/?#]+)', re.I),
        input_mode=USERNAMES,
        actor_id='epctex~twitch-scraper',
        input_key='usernames',
        reserved=('directory', 'videos', 'p', 'settings'),
        field_map={
            'url':            ('url', 'profileUrl'),
            'username':       ('login', 'username'),
            'display_name':   ('displayName',),
            'follower_count': ('followers', 'followersCount'),
            'bio':            ('description',),
        },
    ),
    'snapchat': PlatformSpec(
        tag='snapchat',
        domains=('snapchat.com',),
        username_re=re.compile(r'snapchat\.com/add/([^/?#]+)', re.I),
        input_mode=USERNAMES,
        actor_id='apify~snapchat-profile-scraper',
        input_key='usernames',
        field_map={
            'url':            ('profileUrl', 'url'),
            'username':       ('username',),
            'display_name':   ('displayName', 'title'),
            'follower_count': ('subscriberCount', 'followers'),
            'bio':            ('bio', 'description'),
            'country':        ('country',),
        },
    ),
}


def get_spec(platform: str) -> PlatformSpec:
    """Look up a platform spec by tag."""
    spec = PLATFORM_SPECS.get(platform)
    if not spec:
        raise KeyError(f"Unknown platform '{platform}'")
    return spec


def url_host(url: str) -> str:
    """Lower-cased host of a URL; scheme-less URLs ('instagram.com/x') work too."""
    if not url:
        return ''
    candidate = url.strip()
    if '://' not in candidate and not candidate.startswith('//'):
        candidate = '//' + candidate
    try:
        return (urlparse(candidate).hostname or '').lower()
    except ValueError:
        return ''


def extract_link_pages(*texts: str) -> List[str]:
    """Link-aggregator URLs (linktr.ee/...) mentioned in free text, in order."""
    found: Dict[str, None] = {}
    for text in texts:
        if not isinstance(text, str) or not text:
            continue
        for match in _LINK_PAGE_RE.finditer(text):
            url = match.group(0).rstrip('.,;:)')
            if not url.lower().startswith('http'):
                url = 'https://' + url
            found.setdefault(url, None)
    return list(found)
