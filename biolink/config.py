"""
Centralized configuration — env vars and runtime constants.
"""
import os


# ── Logging ──────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_FORMAT = os.getenv('LOG_FORMAT', 'text')

# ── Apify ─────────────────────────────────────────────────────────────────────
APIFY_API_TOKEN = os.getenv('APIFY_API_TOKEN')
APIFY_ACTOR_TIMEOUT_SECS = int(os.getenv('APIFY_ACTOR_TIMEOUT_SECS', '300'))

# ── Dispatch ──────────────────────────────────────────────────────────────────
# Deadline for the whole provider fan-out. Empty / 0 = wait for every lookup.
DISPATCH_TIMEOUT_SECS = float(os.getenv('DISPATCH_TIMEOUT_SECS') or 0) or None

# ── Short links ───────────────────────────────────────────────────────────────
SHORT_LINK_TIMEOUT_SECS = float(os.getenv('SHORT_LINK_TIMEOUT_SECS', '10'))

# ── Enrichment knobs (priorities, toggles, actor ids) ─────────────────────────
ENRICHMENT_CONFIG_PATH = os.getenv(
    'ENRICHMENT_CONFIG_PATH',
    os.path.join(os.path.dirname(__file__), 'pipeline', 'enrichment_config.yaml'),
)

# ── Platform tags ─────────────────────────────────────────────────────────────
PLATFORMS = [
    'instagram',
    'tiktok',
    'twitter',
    'youtube',
    'twitch',
    'snapchat',
]
