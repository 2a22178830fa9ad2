"""
Enrichment config loader — platform priorities, toggles, actor overrides.

Follows the same pattern as the other YAML-backed settings: YAML file with
in-memory cache and hardcoded fallback if the file is missing.
"""
import logging
from typing import List, Optional

import yaml

from biolink.config import ENRICHMENT_CONFIG_PATH, PLATFORMS

logger = logging.getLogger('pipeline.config')


_enrichment_config = None


def _default_config():
    """Hardcoded fallback if YAML is missing."""
    return {
        'version': 'default',
        'email_priority': list(PLATFORMS),
        'top_platform_priority': list(PLATFORMS),
        'url_replication': 5,
        'toggles': {
            'recognize_x_domain': True,
            'expand_youtube_short_links': False,
        },
        'actors': {},
    }


def load_enrichment_config(path: Optional[str] = None) -> dict:
    """Load enrichment config from YAML, with in-memory cache and hardcoded fallback."""
    global _enrichment_config
    if _enrichment_config is not None:
        return _enrichment_config

    config_path = path or ENRICHMENT_CONFIG_PATH
    try:
        with open(config_path, 'r') as f:
            loaded = yaml.safe_load(f) or {}
        _enrichment_config = {**_default_config(), **loaded}
        logger.info("Config loaded from YAML (version=%s)", _enrichment_config.get('version', '?'))
    except (OSError, yaml.YAMLError) as e:
        logger.warning("YAML config not found (%s), using defaults", e)
        _enrichment_config = _default_config()

    return _enrichment_config


def get_email_priority() -> List[str]:
    cfg = load_enrichment_config()
    return list(cfg.get('email_priority') or PLATFORMS)


def get_top_platform_priority() -> List[str]:
    cfg = load_enrichment_config()
    return list(cfg.get('top_platform_priority') or PLATFORMS)


def get_url_replication() -> int:
    """How many times each twitter start URL is repeated in the provider input."""
    cfg = load_enrichment_config()
    return max(1, int(cfg.get('url_replication') or 1))


def get_toggle(name: str, default: bool = False) -> bool:
    cfg = load_enrichment_config()
    return bool((cfg.get('toggles') or {}).get(name, default))


def get_actor_override(platform: str) -> Optional[str]:
    cfg = load_enrichment_config()
    return (cfg.get('actors') or {}).get(platform)


def reset_cache():
    """Reset the in-memory cache (useful for testing)."""
    global _enrichment_config
    _enrichment_config = None
