"""Shared test fixtures."""
import pytest
from unittest.mock import MagicMock

from biolink.models.links import PageContent, RawLink
from biolink.pipeline import enrichment_config
from biolink.pipeline.base import PipelineSettings


@pytest.fixture(autouse=True)
def _reset_enrichment_config():
    """Each test starts with a cold YAML cache."""
    enrichment_config.reset_cache()
    yield
    enrichment_config.reset_cache()


@pytest.fixture
def settings():
    """Default settings without touching env or YAML."""
    return PipelineSettings()


@pytest.fixture
def make_page():
    """Factory fixture — builds a PageContent from (title, url) tuples."""
    def _make(social=(), featured=(), text='', **overrides):
        defaults = dict(
            url='https://linktr.ee/alice',
            title='Alice | Linktree',
            display_name='Alice',
            social_links=[RawLink(title=t, url=u) for t, u in social],
            featured_links=[RawLink(title=t, url=u) for t, u in featured],
            text=text,
        )
        defaults.update(overrides)
        return PageContent(**defaults)
    return _make


@pytest.fixture
def instagram_item():
    """Item shaped like apify~instagram-profile-scraper output."""
    return {
        'inputUrl': 'https://www.instagram.com/alice',
        'url': 'https://www.instagram.com/alice',
        'username': 'alice',
        'fullName': 'Alice Example',
        'followersCount': 52000,
        'biography': 'Travel + food\nreach me at x@y.com',
        'externalUrl': 'https://linktr.ee/alice',
    }


@pytest.fixture
def tiktok_item():
    """Item shaped like clockworks~tiktok-profile-scraper output."""
    return {
        'id': '7300000000000000000',
        'text': 'first video',
        'authorMeta': {
            'name': 'alice.tt',
            'nickName': 'Alice on TikTok',
            'profileUrl': 'https://www.tiktok.com/@alice.tt',
            'fans': 180000,
            'heart': 2400000,
            'signature': 'daily vlogs 🎥\nbiz: tt@alice.com',
            'region': 'US',
            'bioLink': {'link': 'beacons.ai/alice'},
        },
    }


@pytest.fixture
def twitter_item():
    """Item shaped like apidojo~tweet-scraper output (tweet with author)."""
    return {
        'type': 'tweet',
        'text': 'hello',
        'author': {
            'userName': 'alice_x',
            'name': 'Alice X',
            'url': 'https://x.com/alice_x',
            'followers': 9100,
            'favouritesCount': 300,
            'description': 'writer',
            'location': 'Lisbon',
        },
    }


@pytest.fixture
def make_provider():
    """Factory fixture — MagicMock provider returning items or raising."""
    def _make(items=None, error=None):
        provider = MagicMock()
        if error is not None:
            provider.side_effect = error
        else:
            provider.return_value = items if items is not None else []
        return provider
    return _make
