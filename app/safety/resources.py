"""
Support resources and locale-aware resolution.

The catalog is read-only reference data. The resolver turns a detected
crisis level (and, for crises, the user's locale) into the bundle shown
on the intervention surface. Resolution is a pure function of its inputs.
"""

import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from app.safety.models import (
    CrisisLevel,
    CrisisResources,
    Resource,
    ResourceBundle,
    ResourceGroup,
    ResourcePriority,
)

logger = logging.getLogger(__name__)


CRISIS_MESSAGE = "Your wellbeing matters. Please reach out for support:"
SUPPORT_MESSAGE = "Support is available. Consider these resources:"
TRAUMA_MESSAGE = "Trauma-informed support can help:"

US_REGIONS = frozenset({"US"})
UK_REGIONS = frozenset({"GB", "UK"})


# ==================================
# Catalog
# ==================================

def _frozen(entries: dict[str, Resource]) -> Mapping[str, Resource]:
    return MappingProxyType(dict(entries))


@dataclass(frozen=True)
class ResourceCatalog:
    """Support organizations grouped by domain."""

    crisis: Mapping[str, Resource] = field(default_factory=lambda: _frozen({
        "us": Resource(
            name="988 Suicide & Crisis Lifeline",
            phone="988",
            text="Text HOME to 741741",
            web="https://988lifeline.org",
        ),
        "uk": Resource(
            name="Samaritans",
            phone="116 123",
            email="jo@samaritans.org",
            web="https://www.samaritans.org",
        ),
        "international": Resource(
            name="International Crisis Lines",
            web="https://findahelpline.com",
        ),
    }))

    neurodivergent: Mapping[str, Resource] = field(default_factory=lambda: _frozen({
        "adhd": Resource(
            name="CHADD - ADHD Support",
            web="https://chadd.org",
            description="Resources and support for ADHD",
        ),
        "autism": Resource(
            name="Autistic Self Advocacy Network",
            web="https://autisticadvocacy.org",
            description="By and for autistic people",
        ),
        "dyslexia": Resource(
            name="International Dyslexia Association",
            web="https://dyslexiaida.org",
            description="Information and support for dyslexia",
        ),
    }))

    mental_health: Mapping[str, Resource] = field(default_factory=lambda: _frozen({
        "therapy": Resource(
            name="Psychology Today",
            web="https://www.psychologytoday.com/us/therapists",
            description="Find therapists near you",
        ),
        "apps": Resource(
            name="Mental Health Apps",
            items=("Headspace", "Calm", "DBT Coach", "MindShift"),
        ),
        "peer": Resource(
            name="NAMI - Peer Support",
            web="https://www.nami.org/Support-Education/Support-Groups",
            description="Peer-led support groups",
        ),
    }))

    trauma: Mapping[str, Resource] = field(default_factory=lambda: _frozen({
        "ptsd": Resource(
            name="PTSD Alliance",
            web="http://www.ptsdalliance.org",
            description="PTSD resources and support",
        ),
        "cptsd": Resource(
            name="Complex PTSD Resources",
            web="https://cptsdfoundation.org",
            description="Complex trauma support",
        ),
        "therapy": Resource(
            name="Trauma-Informed Therapists",
            web="https://www.psychologytoday.com/us/therapists/trauma-and-ptsd",
            description="Specialized trauma therapy",
        ),
    }))


DEFAULT_CATALOG = ResourceCatalog()


# ==================================
# Locale Handling
# ==================================

def locale_regions(locale: Optional[str]) -> frozenset[str]:
    """
    Extract region subtags from a locale or Accept-Language value.

    Only the first language range is considered, and the leading language
    subtag is never read as a region ("uk-UA" is Ukrainian in Ukraine).

    Examples:
        "en-US" -> {"US"}
        "en_GB" -> {"GB"}
        "en-GB,en;q=0.9" -> {"GB"}
        "fr" -> set()
    """
    if not locale:
        return frozenset()

    primary = locale.split(",")[0].split(";")[0].strip()
    subtags = [tag for tag in re.split(r"[-_]", primary) if tag]
    return frozenset(
        tag.upper() for tag in subtags[1:]
        if len(tag) == 2 and tag.isalpha()
    )


# ==================================
# Resolver
# ==================================

class ResourceResolver:
    """
    Maps crisis levels to resource bundles.

    Usage:
        resolver = ResourceResolver()
        bundle = resolver.resolve_crisis_resources("en-GB")
        bundle.immediate[0].name  # "Samaritans"
    """

    def __init__(self, catalog: ResourceCatalog = DEFAULT_CATALOG):
        self.catalog = catalog

    def resolve_crisis_resources(self, locale: Optional[str]) -> CrisisResources:
        """
        Build the crisis bundle for a locale.

        The region line (US or UK) comes first when the locale names one;
        the international directory is always last.
        """
        regions = locale_regions(locale)
        immediate: list[Resource] = []

        if regions & US_REGIONS:
            immediate.append(self.catalog.crisis["us"])
        elif regions & UK_REGIONS:
            immediate.append(self.catalog.crisis["uk"])
        else:
            logger.debug(f"No regional crisis line for locale={locale!r}")

        immediate.append(self.catalog.crisis["international"])

        return CrisisResources(
            immediate=tuple(immediate),
            message=CRISIS_MESSAGE,
            priority=ResourcePriority.HIGH,
        )

    def resolve_support_resources(self) -> ResourceGroup:
        """Therapy, peer and app resources for moderate distress."""
        mental_health = self.catalog.mental_health
        return ResourceGroup(
            entries={
                "therapy": mental_health["therapy"],
                "peer": mental_health["peer"],
                "apps": mental_health["apps"],
            },
            message=SUPPORT_MESSAGE,
            priority=ResourcePriority.MEDIUM,
        )

    def resolve_trauma_resources(self) -> ResourceGroup:
        """PTSD, complex trauma and trauma therapy resources."""
        trauma = self.catalog.trauma
        return ResourceGroup(
            entries={
                "ptsd": trauma["ptsd"],
                "cptsd": trauma["cptsd"],
                "therapy": trauma["therapy"],
            },
            message=TRAUMA_MESSAGE,
            priority=ResourcePriority.MEDIUM,
        )

    def resolve_for_level(
        self,
        level: CrisisLevel,
        locale: Optional[str] = None,
    ) -> ResourceBundle:
        """Dispatch to the resolver matching a crisis level."""
        if level == CrisisLevel.SEVERE:
            return self.resolve_crisis_resources(locale)
        if level == CrisisLevel.MODERATE:
            return self.resolve_support_resources()
        return self.resolve_trauma_resources()

    def resolve_flag_resources(
        self,
        domain: str,
        key: str,
        message: str,
    ) -> ResourceGroup:
        """Single-entry group for an assessment flag."""
        resources: Mapping[str, Resource] = getattr(self.catalog, domain)
        return ResourceGroup(
            entries={key: resources[key]},
            message=message,
            priority=ResourcePriority.MEDIUM,
        )
