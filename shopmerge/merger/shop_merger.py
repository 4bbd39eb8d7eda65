"""
Reconciliation of shop listings from SAS OnlineShopping and Trumf Netthandel.

Records are joined on their exact, case-sensitive name. Each merged shop
tracks which sources contributed it, in first-seen order, and carries the
source-specific extension blocks.
"""

import logging
from typing import Any, Dict, List, Optional

from ..config import DEFAULT_CONFIG
from ..core.models import (
    MergedShop,
    SasOnlineShoppingExtra,
    Source,
    SourceRecord,
    TrumfNetthandelExtra,
)


class ShopMerger:
    """
    Merges SAS and Trumf shop records into one list of MergedShop.

    The SAS extension is absent for shops SAS does not list, while shops
    Trumf does not list still get an empty Trumf extension.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, logger=None):
        """
        Initialize shop merger.

        Args:
            config: Service configuration, used for the extension base URLs
            logger: Request-scoped logger, defaults to a class logger
        """
        self.config = config or DEFAULT_CONFIG
        self.logger = logger or logging.getLogger(self.__class__.__name__)

        sources = self.config['sources']
        self.store_base_url = sources[Source.SAS_ONLINE_SHOPPING.value]['store_base_url']
        self.cashback_base_url = sources[Source.TRUMF_NETTHANDEL.value]['cashback_base_url']

    def merge(
        self,
        sas_records: List[SourceRecord],
        trumf_records: List[SourceRecord]
    ) -> List[MergedShop]:
        """
        Merge two record lists by shop name.

        Args:
            sas_records: Records from the SAS scraper
            trumf_records: Records from the Trumf scraper

        Returns:
            Merged shops; ordering is not part of the contract
        """
        shops: Dict[str, MergedShop] = {}

        for record in sas_records:
            # A repeated SAS name replaces the earlier entry
            shop = MergedShop(name=record.name, sources=[record.source])
            self._apply_extension(shop, record)
            shops[record.name] = shop

        for record in trumf_records:
            shop = shops.get(record.name)
            if shop is None:
                shop = MergedShop(name=record.name, sources=[record.source])
                shops[record.name] = shop
            else:
                shop.add_source(record.source)
            self._apply_extension(shop, record)

        for shop in shops.values():
            if not shop.has_source(Source.TRUMF_NETTHANDEL):
                shop.trumf_extra = TrumfNetthandelExtra()

        merged = list(shops.values())
        self.logger.info(f"Merge complete: {self.summarize(merged)}")
        return merged

    def _apply_extension(self, shop: MergedShop, record: SourceRecord) -> None:
        if record.source == Source.SAS_ONLINE_SHOPPING:
            shop.sas_extra = SasOnlineShoppingExtra.from_record(record, self.store_base_url)
        elif record.source == Source.TRUMF_NETTHANDEL:
            shop.trumf_extra = TrumfNetthandelExtra.from_record(record, self.cashback_base_url)

    @staticmethod
    def summarize(shops: List[MergedShop]) -> Dict[str, int]:
        """Count merged shops by contributing sources."""
        stats = {
            'total': len(shops),
            'both': 0,
            'sasonlineshopping_only': 0,
            'trumfnetthandel_only': 0,
        }
        for shop in shops:
            in_sas = shop.has_source(Source.SAS_ONLINE_SHOPPING)
            in_trumf = shop.has_source(Source.TRUMF_NETTHANDEL)
            if in_sas and in_trumf:
                stats['both'] += 1
            elif in_sas:
                stats['sasonlineshopping_only'] += 1
            elif in_trumf:
                stats['trumfnetthandel_only'] += 1
        return stats


def merge_shops(
    sas_records: List[SourceRecord],
    trumf_records: List[SourceRecord],
    config: Optional[Dict[str, Any]] = None
) -> List[MergedShop]:
    """Merge record lists with a default-configured ShopMerger."""
    return ShopMerger(config).merge(sas_records, trumf_records)
