"""Host integration: translation registry, domain resolvers, textdomain loader."""

from transcache.integration.registry import TranslationRegistry
from transcache.integration.resolvers import (
    DomainResolver,
    PluginHeaderResolver,
    StaticDomainResolver,
)
from transcache.integration.textdomain import TextdomainLoader

__all__ = [
    "DomainResolver",
    "PluginHeaderResolver",
    "StaticDomainResolver",
    "TextdomainLoader",
    "TranslationRegistry",
]
