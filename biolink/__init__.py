"""
Link-in-bio enrichment: classify a bio page's links, look up every linked
social profile, and assemble one normalized record with the best contact email.
"""
from biolink.pipeline.manager import enrich_page

__all__ = ['enrich_page']
