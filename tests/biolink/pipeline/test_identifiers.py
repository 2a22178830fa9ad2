"""Tests for biolink.pipeline.identifiers — usernames, start URLs, provider input."""
import pytest

from biolink.models.links import RawLink
from biolink.pipeline.base import PipelineSettings
from biolink.pipeline.identifiers import (
    build_provider_requests,
    collect_start_urls,
    extract_username,
    extract_usernames,
)


class TestExtractUsername:

    @pytest.mark.parametrize('platform,url,expected', [
        ('instagram', 'https://instagram.com/alice', 'alice'),
        ('instagram', 'https://www.instagram.com/alice/?hl=en', 'alice'),
        ('tiktok', 'https://www.tiktok.com/@alice.tt?lang=en', 'alice.tt'),
        ('tiktok', 'https://www.tiktok.com/@alice.tt/video/7300000000000000000', 'alice.tt'),
        ('twitch', 'https://www.twitch.tv/alice_live', 'alice_live'),
        ('snapchat', 'https://www.snapchat.com/add/alice.snaps', 'alice.snaps'),
    ])
    def test_captures_handle(self, platform, url, expected):
        assert extract_username(url, platform) == expected

    def test_non_matching_url_yields_none(self):
        assert extract_username('https://www.tiktok.com/discover', 'tiktok') is None
        assert extract_username('https://www.snapchat.com/alice', 'snapchat') is None

    def test_reserved_paths_are_not_usernames(self):
        assert extract_username('https://instagram.com/p/Cxyz/', 'instagram') is None
        assert extract_username('https://instagram.com/reel/Cxyz', 'instagram') is None


class TestExtractUsernames:

    def test_skips_silently_and_dedups(self):
        links = [
            RawLink('IG', 'https://instagram.com/alice'),
            RawLink('IG post', 'https://instagram.com/p/abc'),
            RawLink('IG again', 'https://www.instagram.com/alice/'),
            RawLink('IG2', 'https://instagram.com/alice_two'),
        ]
        assert extract_usernames(links, 'instagram') == ['alice', 'alice_two']

    def test_empty(self):
        assert extract_usernames([], 'instagram') == []


class TestCollectStartUrls:

    def test_verbatim_without_replication(self):
        links = [RawLink('YT', 'https://www.youtube.com/@alice')]
        assert collect_start_urls(links, 'youtube') == ['https://www.youtube.com/@alice']

    def test_replication_factor(self):
        links = [RawLink('X', 'https://x.com/alice')]
        assert collect_start_urls(links, 'twitter', replication=5) == ['https://x.com/alice'] * 5

    def test_duplicates_replicated_once(self):
        links = [RawLink('X', 'https://x.com/alice'), RawLink('Twitter', 'https://x.com/alice')]
        assert collect_start_urls(links, 'twitter', replication=2) == ['https://x.com/alice'] * 2

    def test_non_matching_url_skipped(self):
        links = [RawLink('YT', 'https://youtube.com')]
        assert collect_start_urls(links, 'youtube') == []


class TestBuildProviderRequests:

    def test_every_platform_has_an_entry(self, settings):
        requests = build_provider_requests([], settings)
        assert set(requests) == set(settings.platforms)
        assert all(r.is_empty for r in requests.values())
        assert all(r.payload == {} for r in requests.values())

    def test_instagram_payload(self, settings):
        requests = build_provider_requests([RawLink('IG', 'https://instagram.com/alice')], settings)
        assert requests['instagram'].values == ['alice']
        assert requests['instagram'].payload == {'usernames': ['alice'], 'resultsLimit': 1}

    def test_tiktok_payload(self, settings):
        requests = build_provider_requests([RawLink('TT', 'https://www.tiktok.com/@alice')], settings)
        assert requests['tiktok'].payload == {'profiles': ['alice'], 'resultsPerPage': 1}

    def test_twitter_urls_replicated_per_setting(self):
        settings = PipelineSettings(url_replication=3)
        requests = build_provider_requests([RawLink('X', 'https://x.com/alice')], settings)
        assert requests['twitter'].payload['startUrls'] == ['https://x.com/alice'] * 3

    def test_youtube_urls_not_replicated(self, settings):
        requests = build_provider_requests([RawLink('YT', 'https://youtube.com/@alice')], settings)
        assert requests['youtube'].payload['startUrls'] == [{'url': 'https://youtube.com/@alice'}]

    def test_unmatched_link_leaves_platform_empty(self, settings):
        requests = build_provider_requests([RawLink('TT', 'https://www.tiktok.com/foryou')], settings)
        assert requests['tiktok'].is_empty
