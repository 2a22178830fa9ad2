from biolink.models.emails import EmailSet, EMAIL_RE
from biolink.models.links import RawLink, ClassifiedLinks, PageContent
from biolink.models.profile import NormalizedProfile, ProviderRequest, ProviderResult
from biolink.models.record import OutputRecord

__all__ = [
    'EmailSet', 'EMAIL_RE',
    'RawLink', 'ClassifiedLinks', 'PageContent',
    'NormalizedProfile', 'ProviderRequest', 'ProviderResult',
    'OutputRecord',
]
