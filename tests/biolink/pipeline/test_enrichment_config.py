"""Tests for biolink.pipeline.enrichment_config and PipelineSettings.from_config."""
import os
from unittest.mock import patch

import pytest

from biolink.config import PLATFORMS
from biolink.pipeline import enrichment_config
from biolink.pipeline.base import PipelineSettings
from biolink.pipeline.enrichment_config import (
    get_actor_override,
    get_email_priority,
    get_toggle,
    get_url_replication,
    load_enrichment_config,
)


class TestLoadEnrichmentConfig:

    def test_bundled_yaml_loads(self):
        cfg = load_enrichment_config()
        assert cfg['version'] != 'default'
        assert cfg['url_replication'] == 5
        assert cfg['email_priority'][0] == 'instagram'

    def test_missing_file_falls_back_to_defaults(self, tmp_path):
        cfg = load_enrichment_config(str(tmp_path / 'nope.yaml'))
        assert cfg['version'] == 'default'
        assert cfg['email_priority'] == PLATFORMS

    def test_cached(self, tmp_path):
        path = tmp_path / 'cfg.yaml'
        path.write_text('version: one\nurl_replication: 2\n')
        assert load_enrichment_config(str(path))['version'] == 'one'
        path.write_text('version: two\n')
        assert load_enrichment_config(str(path))['version'] == 'one'
        enrichment_config.reset_cache()
        assert load_enrichment_config(str(path))['version'] == 'two'

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / 'cfg.yaml'
        path.write_text('url_replication: 3\n')
        load_enrichment_config(str(path))
        assert get_url_replication() == 3
        assert get_email_priority() == PLATFORMS

    def test_custom_values(self, tmp_path):
        path = tmp_path / 'cfg.yaml'
        path.write_text(
            'email_priority: [youtube, instagram]\n'
            'toggles:\n  recognize_x_domain: false\n'
            'actors:\n  twitch: someone~twitch-scraper\n'
        )
        load_enrichment_config(str(path))
        assert get_email_priority() == ['youtube', 'instagram']
        assert get_toggle('recognize_x_domain', True) is False
        assert get_actor_override('twitch') == 'someone~twitch-scraper'
        assert get_actor_override('instagram') is None

    def test_replication_never_below_one(self, tmp_path):
        path = tmp_path / 'cfg.yaml'
        path.write_text('url_replication: 0\n')
        load_enrichment_config(str(path))
        assert get_url_replication() == 1


class TestPipelineSettings:

    def test_from_config_reads_yaml(self):
        settings = PipelineSettings.from_config()
        assert settings.url_replication == 5
        assert settings.recognize_x_domain is True
        assert settings.expand_youtube_short_links is False

    def test_overrides_win(self):
        settings = PipelineSettings.from_config(url_replication=1, dispatch_timeout=30)
        assert settings.url_replication == 1
        assert settings.dispatch_timeout == 30

    def test_domains_for_twitter_toggle(self):
        assert PipelineSettings().domains_for('twitter') == ('twitter.com', 'x.com')
        assert PipelineSettings(recognize_x_domain=False).domains_for('twitter') == ('twitter.com',)
