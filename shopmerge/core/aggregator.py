"""
Request pipeline: fetch both sources one after the other, then merge.
"""

import logging
from typing import Any, Dict, List, Optional

from ..merger.shop_merger import ShopMerger
from ..scraper.shop_scraper import SasShopScraper, TrumfShopScraper
from .models import MergedShop

logger = logging.getLogger(__name__)


def aggregate_shops(config: Dict[str, Any], request_logger: Optional[Any] = None) -> List[MergedShop]:
    """
    Run the fetch-merge pipeline for one request.

    Any upstream error propagates to the caller; no partial result is built.

    Args:
        config: Service configuration
        request_logger: Logger bound to the current request

    Returns:
        Merged shops
    """
    log = request_logger or logger

    log.info("Fetching SAS shops")
    with SasShopScraper(config, logger=log) as scraper:
        sas_records = scraper.fetch()
    log.info(f"Found {len(sas_records)} SAS shops")

    log.info("Fetching ViaTrumf shops")
    with TrumfShopScraper(config, logger=log) as scraper:
        trumf_records = scraper.fetch()
    log.info(f"Found {len(trumf_records)} ViaTrumf shops")

    log.info("Combining data")
    return ShopMerger(config, logger=log).merge(sas_records, trumf_records)
