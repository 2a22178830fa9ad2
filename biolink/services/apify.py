"""
Apify-backed enrichment providers.

Each platform maps to one Apify actor (see biolink.platforms). A provider
runs the actor with the platform's run input, waits for it, and returns the
items of the run's default dataset. The pipeline never sees Apify types.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

from biolink.config import APIFY_API_TOKEN, APIFY_ACTOR_TIMEOUT_SECS, PLATFORMS
from biolink.errors import ProviderFailure
from biolink.pipeline.enrichment_config import get_actor_override
from biolink.platforms import PLATFORM_SPECS

logger = logging.getLogger('services.apify')

# Terminal run states that mean "no usable dataset"
_FAILED_STATUSES = {'FAILED', 'ABORTING', 'ABORTED', 'TIMING-OUT', 'TIMED-OUT'}


class ApifyActorProvider:
    """
    Provider callable for one platform.

    Usage:
        provider = ApifyActorProvider('instagram', 'apify~instagram-profile-scraper', client)
        items = provider({'usernames': ['alice'], 'resultsLimit': 1})
    """

    def __init__(self, platform: str, actor_id: str, client,
                 timeout_secs: int = APIFY_ACTOR_TIMEOUT_SECS):
        self.platform = platform
        self.actor_id = actor_id
        self.client = client
        self.timeout_secs = timeout_secs

    def __call__(self, run_input: Dict[str, Any]) -> List[Dict[str, Any]]:
        logger.info("Running %s for %s", self.actor_id, self.platform)
        run = self.client.actor(self.actor_id).call(
            run_input=run_input, timeout_secs=self.timeout_secs
        )
        if not run:
            raise ProviderFailure(self.platform, f"actor {self.actor_id} returned no run")

        status = run.get('status')
        if status in _FAILED_STATUSES:
            raise ProviderFailure(self.platform, f"actor {self.actor_id} run {status}")

        dataset_id = run.get('defaultDatasetId')
        if not dataset_id:
            raise ProviderFailure(self.platform, f"actor {self.actor_id} run has no dataset")

        items = list(self.client.dataset(dataset_id).iterate_items())
        logger.info("%s returned %d item(s)", self.actor_id, len(items))
        return items

    def __repr__(self):
        return f"ApifyActorProvider({self.platform!r}, {self.actor_id!r})"


def build_provider_registry(token: Optional[str] = APIFY_API_TOKEN,
                            platforms: Sequence[str] = PLATFORMS,
                            client=None,
                            timeout_secs: int = APIFY_ACTOR_TIMEOUT_SECS) -> Dict[str, ApifyActorProvider]:
    """
    One ApifyActorProvider per platform, sharing a single ApifyClient.

    Actor ids come from the platform table unless enrichment_config.yaml
    overrides them. Returns {} when no token/client is available; every
    lookup is then rejected as unsupported and the pipeline runs without
    provider data.
    """
    if client is None:
        if not token:
            logger.warning("APIFY_API_TOKEN not set — no enrichment providers")
            return {}
        from apify_client import ApifyClient
        client = ApifyClient(token)

    registry: Dict[str, ApifyActorProvider] = {}
    for platform in platforms:
        spec = PLATFORM_SPECS.get(platform)
        if not spec:
            logger.warning("Unknown platform '%s' — no provider registered", platform)
            continue
        actor_id = get_actor_override(platform) or spec.actor_id
        registry[platform] = ApifyActorProvider(platform, actor_id, client, timeout_secs)
    return registry
