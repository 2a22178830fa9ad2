"""
Pipeline Stage 4: DISPATCH — concurrent per-platform provider lookups.

One lookup per platform with non-empty input, all launched together on a
thread pool and joined. Each branch is isolated: a provider that raises (or
misses the deadline) only loses its own platform's data.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from biolink.errors import ProviderFailure, TotalDispatchFailure, UnsupportedPlatformError
from biolink.models.profile import ProviderRequest, ProviderResult

logger = logging.getLogger('pipeline.dispatch')

# run input → ordered provider items
Provider = Callable[[Dict[str, Any]], Sequence[Dict[str, Any]]]


@dataclass
class DispatchOutcome:
    """One ProviderResult per requested platform, keyed by platform tag."""
    results: Dict[str, ProviderResult] = field(default_factory=dict)

    @property
    def dispatched(self) -> List[str]:
        return [p for p, r in self.results.items() if r.dispatched]

    @property
    def failed(self) -> List[str]:
        return [p for p, r in self.results.items() if r.dispatched and r.failed]

    @property
    def errors(self) -> Dict[str, str]:
        return {p: r.error for p, r in self.results.items() if r.error}

    @property
    def degraded(self) -> bool:
        """True when something was dispatched and every dispatched lookup failed."""
        dispatched = self.dispatched
        return bool(dispatched) and len(self.failed) == len(dispatched)

    def raise_for_total_failure(self):
        if self.degraded:
            raise TotalDispatchFailure(self.failed)


class ProviderDispatcher:
    """
    Fan out provider lookups.

    Usage:
        dispatcher = ProviderDispatcher({'instagram': ig_provider, ...}, timeout=120)
        outcome = dispatcher.dispatch(requests)
        outcome.results['instagram'].items
    """

    def __init__(self, providers: Dict[str, Provider], timeout: Optional[float] = None,
                 max_workers: Optional[int] = None):
        self.providers = dict(providers or {})
        self.timeout = timeout  # seconds for the whole fan-out; None = no deadline
        self.max_workers = max_workers

    def _provider_for(self, platform: str) -> Provider:
        provider = self.providers.get(platform)
        if provider is None:
            raise UnsupportedPlatformError(platform)
        return provider

    def _call(self, platform: str, provider: Provider, request: ProviderRequest) -> List[Dict[str, Any]]:
        """Single provider call; every error comes back as ProviderFailure."""
        try:
            items = provider(request.payload)
            if items is None:
                raise ProviderFailure(platform, 'provider returned no item list')
            # lazy iterables (dataset iterators) may fail while being drained
            return list(items)
        except ProviderFailure:
            raise
        except Exception as e:
            raise ProviderFailure(platform, str(e) or type(e).__name__, cause=e) from e

    def dispatch(self, requests: Dict[str, ProviderRequest]) -> DispatchOutcome:
        """
        Run every non-empty request concurrently and wait for all of them.

        Empty requests get an empty result without being sent. Platforms with
        no registered provider are rejected before dispatch and come back
        absent. Lookups still running at the deadline are abandoned and
        recorded as failed.
        """
        results: Dict[str, ProviderResult] = {}
        eligible: Dict[str, tuple] = {}

        for platform, request in requests.items():
            if request is None or request.is_empty:
                results[platform] = ProviderResult(platform=platform, items=[])
                continue
            try:
                provider = self._provider_for(platform)
            except UnsupportedPlatformError as e:
                logger.warning("%s — skipping", e)
                results[platform] = ProviderResult(platform=platform, items=None, error=str(e))
                continue
            eligible[platform] = (provider, request)

        if eligible:
            logger.info("Dispatching %d provider lookup(s): %s",
                        len(eligible), ', '.join(eligible))
            results.update(self._run_concurrently(eligible))

        outcome = DispatchOutcome(results={p: results[p] for p in requests})
        if outcome.failed:
            logger.info("%d/%d provider lookup(s) failed: %s",
                        len(outcome.failed), len(outcome.dispatched), ', '.join(outcome.failed),
                        extra={'fields': {'provider_failures': outcome.failed}})
        if outcome.degraded:
            logger.warning("Every dispatched provider failed — record will be degraded")
        return outcome

    def _run_concurrently(self, eligible: Dict[str, tuple]) -> Dict[str, ProviderResult]:
        results: Dict[str, ProviderResult] = {}
        pool = ThreadPoolExecutor(max_workers=self.max_workers or len(eligible))
        try:
            futures = {
                pool.submit(self._call, platform, provider, request): platform
                for platform, (provider, request) in eligible.items()
            }
            done, not_done = wait(futures, timeout=self.timeout)

            for fut in done:
                platform = futures[fut]
                try:
                    items = fut.result()
                except Exception as e:
                    failure = e if isinstance(e, ProviderFailure) else ProviderFailure(
                        platform, str(e) or type(e).__name__, cause=e)
                    logger.error("%s", failure)
                    results[platform] = ProviderResult(
                        platform=platform, items=None, error=str(failure), dispatched=True,
                    )
                    continue
                logger.info("%s done: %d item(s)", platform, len(items))
                results[platform] = ProviderResult(platform=platform, items=items, dispatched=True)

            for fut in not_done:
                fut.cancel()
                platform = futures[fut]
                e = ProviderFailure(platform, f"no result within {self.timeout}s deadline")
                logger.error("%s", e)
                results[platform] = ProviderResult(
                    platform=platform, items=None, error=str(e), dispatched=True,
                )
        finally:
            # Don't block on lookups abandoned at the deadline
            pool.shutdown(wait=False, cancel_futures=True)
        return results
