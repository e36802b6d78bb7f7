# 設定モジュール
from aware.config.catalog_config import CatalogConfig

__all__ = ["CatalogConfig"]
