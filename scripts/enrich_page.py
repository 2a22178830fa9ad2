#!/usr/bin/env python3
"""
Enrich a saved link-in-bio page from the command line.

Parses the HTML, runs every linked social profile through its Apify provider,
and prints the resulting record as JSON.

Usage:
    python scripts/enrich_page.py page.html --url https://linktr.ee/someone
    python scripts/enrich_page.py page.html --url ... --flat      # tabular keys
    python scripts/enrich_page.py page.html --url ... --timeout 120

Requires: APIFY_API_TOKEN (without it, only page-level data is returned).
"""
import argparse
import json
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from biolink.logging_config import configure_logging
from biolink.pipeline.assemble import to_flat_dict
from biolink.pipeline.base import PipelineSettings
from biolink.pipeline.manager import enrich_page
from biolink.services.apify import build_provider_registry
from biolink.services.linkpage import parse_link_page
from biolink.services.shortlinks import RedirectTransport
from biolink.services.sinks import CallbackSink


def main(argv=None):
    parser = argparse.ArgumentParser(description='Enrich a saved link-in-bio page.')
    parser.add_argument('html_file', help='Path to the saved page HTML')
    parser.add_argument('--url', required=True, help='Original page URL')
    parser.add_argument('--flat', action='store_true', help='Print the flat tabular record')
    parser.add_argument('--timeout', type=float, default=None,
                        help='Deadline in seconds for all provider lookups')
    args = parser.parse_args(argv)

    configure_logging()

    with open(args.html_file, 'r', encoding='utf-8') as f:
        page = parse_link_page(f.read(), args.url)

    overrides = {'dispatch_timeout': args.timeout} if args.timeout else {}
    settings = PipelineSettings.from_config(**overrides)

    def print_record(record):
        output = to_flat_dict(record) if args.flat else record.to_dict()
        print(json.dumps(output, indent=2, ensure_ascii=False))

    record = enrich_page(
        page,
        providers=build_provider_registry(platforms=settings.platforms),
        transport=RedirectTransport(),
        sink=CallbackSink(print_record),
        settings=settings,
    )

    return 1 if record.degraded else 0


if __name__ == '__main__':
    sys.exit(main())
