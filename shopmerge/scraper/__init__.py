from .shop_scraper import ShopScraper, SasShopScraper, TrumfShopScraper

__all__ = ['ShopScraper', 'SasShopScraper', 'TrumfShopScraper']
