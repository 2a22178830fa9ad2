"""
Page Manager — runs one bio page through every enrichment stage.

  CLASSIFY → SHORT LINKS → IDENTIFIERS → DISPATCH → NORMALIZE → EMAILS → ASSEMBLE

Everything is created fresh per call; nothing is shared between pages, so
callers may run several pages concurrently. Partial data loss never raises:
the best-effort record is always returned (and emitted when a sink is given).
"""
import logging
import time
from typing import Dict, Optional

from biolink.models.emails import EmailSet
from biolink.models.links import ClassifiedLinks, PageContent
from biolink.models.record import OutputRecord
from biolink.pipeline.assemble import assemble_record
from biolink.pipeline.base import PipelineSettings
from biolink.pipeline.classify import classify_links
from biolink.pipeline.dispatch import Provider, ProviderDispatcher
from biolink.pipeline.emails import aggregate_emails, select_primary_email, select_top_platform
from biolink.pipeline.identifiers import build_provider_requests
from biolink.pipeline.normalize import normalize_results
from biolink.pipeline.shortlinks import ShortLinkResolver, Transport

logger = logging.getLogger('pipeline.manager')


def enrich_page(page: PageContent,
                providers: Dict[str, Provider],
                transport: Optional[Transport] = None,
                sink=None,
                settings: Optional[PipelineSettings] = None) -> OutputRecord:
    """
    Enrich one bio page.

    Args:
        page:      Already-extracted page data.
        providers: platform tag → provider callable (run input → items).
        transport: url → final url; used to expand short links. Optional.
        sink:      Anything with ``emit(record)``. Optional.
        settings:  Priorities / toggles / deadline. Defaults from config.

    Returns:
        The OutputRecord; ``degraded`` is set when every dispatched provider failed.
    """
    settings = settings or PipelineSettings.from_config()
    started = time.monotonic()
    logger.info("Enriching %s (%s)", page.url, page.title)

    page_emails = EmailSet()
    classified = classify_links(page.links, page.text, page_emails, settings)

    resolver = ShortLinkResolver(transport, settings.short_link_hosts())
    social = resolver.expand(classified.social)

    requests = build_provider_requests(social, settings)
    dispatcher = ProviderDispatcher(providers, timeout=settings.dispatch_timeout)
    outcome = dispatcher.dispatch(requests)

    profiles = normalize_results(outcome.results)

    emails = aggregate_emails(page_emails, profiles, settings.email_priority)
    primary = select_primary_email(page_emails, profiles, settings.email_priority,
                                   aggregate=emails)
    top_platform = select_top_platform(profiles, settings.top_platform_priority)

    record = assemble_record(
        page=page,
        links=ClassifiedLinks(social=social, other=classified.other),
        page_emails=page_emails,
        profiles=profiles,
        emails=emails,
        primary_email=primary,
        top_platform=top_platform,
        provider_errors=outcome.errors,
        degraded=outcome.degraded,
        platforms=settings.platforms,
    )

    elapsed = time.monotonic() - started
    logger.info(
        "Done %s in %.1fs — %d email(s), main=%s, top=%s%s",
        page.url, elapsed, len(record.emails), record.primary_email, record.top_platform,
        ' [DEGRADED]' if record.degraded else '',
        extra={'fields': {
            'page_url': page.url,
            'emails': len(record.emails),
            'profiles': [p for p, prof in record.profiles.items() if prof],
            'provider_failures': outcome.failed,
            'degraded': record.degraded,
            'elapsed_secs': round(elapsed, 2),
        }},
    )

    if sink is not None:
        sink.emit(record)
    return record
