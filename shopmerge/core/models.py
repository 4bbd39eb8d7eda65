"""
Data models for shop listings.

SourceRecord is what a scraper produces for a single upstream entry;
MergedShop is the reconciled, per-name view that is returned to clients.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Source(Enum):
    """Upstream shop-listing providers."""
    SAS_ONLINE_SHOPPING = "sasonlineshopping"  # JSON API
    TRUMF_NETTHANDEL = "trumfnetthandel"  # scraped HTML page


@dataclass(frozen=True)
class SourceRecord:
    """A single shop as reported by one upstream source."""
    name: str
    source: Source
    attributes: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_sas_json(cls, data: Dict[str, Any]) -> 'SourceRecord':
        """Create a record from one entry of the SAS shops API."""
        return cls(
            name=data.get('name') or '',
            source=Source.SAS_ONLINE_SHOPPING,
            attributes={
                'uuid': data.get('uuid') or '',
                'slug': data.get('slug') or '',
            }
        )

    @classmethod
    def from_trumf_name(cls, name: str) -> 'SourceRecord':
        return cls(name=name, source=Source.TRUMF_NETTHANDEL)


@dataclass
class SasOnlineShoppingExtra:
    """SAS OnlineShopping metadata attached to a merged shop."""
    uuid: str = ''
    slug: str = ''
    url: str = ''

    @classmethod
    def from_record(cls, record: SourceRecord, store_base_url: str) -> 'SasOnlineShoppingExtra':
        """
        Build the extension block for a SAS record.

        Args:
            record: Record produced by the SAS scraper
            store_base_url: Base URL of the SAS shop pages

        Returns:
            Extension with the shop's uuid, slug and store URL
        """
        uuid = record.attributes.get('uuid', '')
        slug = record.attributes.get('slug', '')
        return cls(
            uuid=uuid,
            slug=slug,
            url=f"{store_base_url}/{slug}/{uuid}"
        )

    def to_json(self) -> Dict[str, str]:
        return {'uuid': self.uuid, 'slug': self.slug, 'url': self.url}


@dataclass
class TrumfNetthandelExtra:
    """Trumf Netthandel metadata attached to a merged shop.

    The all-empty instance stands in for shops Trumf does not list.
    """
    slug: str = ''
    url: str = ''

    @classmethod
    def from_record(cls, record: SourceRecord, cashback_base_url: str) -> 'TrumfNetthandelExtra':
        # Trumf has no separate slug, the shop name is used verbatim
        return cls(
            slug=record.name,
            url=f"{cashback_base_url}/{record.name}"
        )

    def is_empty(self) -> bool:
        return not self.slug and not self.url

    def to_json(self) -> Dict[str, str]:
        return {'slug': self.slug, 'url': self.url}


@dataclass
class MergedShop:
    """A shop after reconciliation of all sources, keyed by exact name."""
    name: str
    sources: List[Source] = field(default_factory=list)
    sas_extra: Optional[SasOnlineShoppingExtra] = None
    trumf_extra: Optional[TrumfNetthandelExtra] = None

    def has_source(self, source: Source) -> bool:
        return source in self.sources

    def add_source(self, source: Source) -> None:
        """Record that a source contributed, keeping first-seen order."""
        if source not in self.sources:
            self.sources.append(source)

    def to_json(self) -> Dict[str, Any]:
        """
        Serialize to the external JSON contract.

        The SAS block is omitted when SAS did not contribute.
        """
        data: Dict[str, Any] = {
            'name': self.name,
            'source': [source.value for source in self.sources],
        }
        if self.trumf_extra is not None:
            data['trumfnetthandel_extra'] = self.trumf_extra.to_json()
        if self.sas_extra is not None:
            data['sasonlineshopping_extra'] = self.sas_extra.to_json()
        return data
