"""Tests for biolink.pipeline.emails — aggregate, primary email, top platform."""
import pytest
from unittest.mock import patch

from biolink.models.emails import EmailSet
from biolink.models.profile import NormalizedProfile
from biolink.pipeline.emails import aggregate_emails, select_primary_email, select_top_platform

PRIORITY = ['instagram', 'tiktok', 'twitter', 'youtube', 'twitch', 'snapchat']


def _profile(platform, emails=(), followers=None):
    return NormalizedProfile(platform=platform, emails_found=EmailSet(emails), follower_count=followers)


class TestAggregateEmails:

    def test_union_without_duplicates(self):
        page = EmailSet(['a@b.com'])
        profiles = {
            'instagram': _profile('instagram', ['a@b.com', 'x@y.com']),
            'tiktok': _profile('tiktok', ['x@y.com']),
            'youtube': None,
        }
        assert aggregate_emails(page, profiles, PRIORITY).to_list() == ['a@b.com', 'x@y.com']

    def test_platforms_outside_priority_list_still_included(self):
        profiles = {'snapchat': _profile('snapchat', ['s@snap.com'])}
        assert aggregate_emails(EmailSet(), profiles, ['instagram']).to_list() == ['s@snap.com']

    def test_empty(self):
        assert len(aggregate_emails(EmailSet(), {'instagram': None}, PRIORITY)) == 0


class TestSelectPrimaryEmail:

    def test_page_email_wins(self):
        page = EmailSet(['page@site.com'])
        profiles = {'instagram': _profile('instagram', ['ig@site.com'])}
        assert select_primary_email(page, profiles, PRIORITY) == 'page@site.com'

    def test_platform_priority_order(self):
        profiles = {
            'youtube': _profile('youtube', ['yt@site.com']),
            'tiktok': _profile('tiktok', ['tt@site.com']),
        }
        assert select_primary_email(EmailSet(), profiles, PRIORITY) == 'tt@site.com'

    def test_custom_priority(self):
        profiles = {
            'youtube': _profile('youtube', ['yt@site.com']),
            'tiktok': _profile('tiktok', ['tt@site.com']),
        }
        assert select_primary_email(EmailSet(), profiles, ['youtube', 'tiktok']) == 'yt@site.com'

    def test_skips_platforms_without_emails(self):
        profiles = {
            'instagram': _profile('instagram'),
            'tiktok': None,
            'twitter': _profile('twitter', ['tw@site.com']),
        }
        assert select_primary_email(EmailSet(), profiles, PRIORITY) == 'tw@site.com'

    def test_none_when_nothing_found(self):
        assert select_primary_email(EmailSet(), {'instagram': None}, PRIORITY) is None

    def test_primary_is_member_of_aggregate(self):
        page = EmailSet()
        profiles = {'twitch': _profile('twitch', ['tv@site.com'])}
        primary = select_primary_email(page, profiles, PRIORITY)
        assert primary in aggregate_emails(page, profiles, PRIORITY)

    def test_uses_given_aggregate(self):
        profiles = {'twitch': _profile('twitch', ['tv@site.com'])}
        aggregate = aggregate_emails(EmailSet(), profiles, PRIORITY)
        with patch('biolink.pipeline.emails.aggregate_emails') as rebuilt:
            primary = select_primary_email(EmailSet(), profiles, PRIORITY, aggregate=aggregate)
        rebuilt.assert_not_called()
        assert primary == 'tv@site.com'


class TestSelectTopPlatform:

    def test_highest_follower_count(self):
        profiles = {
            'instagram': _profile('instagram', followers=1000),
            'youtube': _profile('youtube', followers=5000),
            'tiktok': None,
        }
        assert select_top_platform(profiles, PRIORITY) == 'youtube'

    def test_tie_goes_to_priority(self):
        profiles = {
            'youtube': _profile('youtube', followers=5000),
            'tiktok': _profile('tiktok', followers=5000),
        }
        assert select_top_platform(profiles, PRIORITY) == 'tiktok'
        assert select_top_platform(profiles, ['youtube', 'tiktok']) == 'youtube'

    def test_profiles_without_counts_ignored(self):
        profiles = {'instagram': _profile('instagram'), 'twitch': _profile('twitch', followers=0)}
        assert select_top_platform(profiles, PRIORITY) == 'twitch'

    def test_all_absent(self):
        assert select_top_platform({'instagram': None, 'tiktok': _profile('tiktok')}, PRIORITY) is None
