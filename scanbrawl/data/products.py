"""Runtime loader for the product catalog.

Provides cached access to the JSON catalog keyed by barcode. Each record is
validated against ``schema/product_catalog.schema.json`` on first load.
"""
from __future__ import annotations
import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional, Mapping, Any

import jsonschema

from scanbrawl.core.logging import logger
from scanbrawl.core.errors import DataLoadError
from scanbrawl.core.paths import PRODUCT_CATALOG, SCHEMA

_SCHEMA_FILE = SCHEMA / "product_catalog.schema.json"

@dataclass(frozen=True)
class Product:
    jan_code: str
    name: str
    category: str
    price: float
    description: str = ""
    manufacturer: str = ""
    image_url: str = ""
    is_campaign: bool = False

    @classmethod
    def from_record(cls, jan_code: str, raw: Mapping[str, Any]) -> "Product":
        return cls(
            jan_code=jan_code,
            name=raw["name"],
            category=raw.get("category", ""),
            price=raw["price"],
            description=raw.get("description", ""),
            manufacturer=raw.get("manufacturer", ""),
            image_url=raw.get("image_url", ""),
            is_campaign=bool(raw.get("is_campaign", False)),
        )

def _validate(data: Any, path: Path):
    if not _SCHEMA_FILE.exists():
        return
    schema = json.loads(_SCHEMA_FILE.read_text(encoding="utf-8"))
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        raise DataLoadError(str(path), f"schema: {e.message}") from e

def load_catalog(path: Path = PRODUCT_CATALOG) -> Dict[str, Product]:
    """Read and validate a catalog file. Missing file -> empty catalog."""
    if not path.exists():
        logger.warn("ProductCatalogMissing", path=str(path))
        return {}
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise DataLoadError(str(path), str(e)) from e
    _validate(raw, path)
    catalog = {code: Product.from_record(code, rec) for code, rec in raw.items()}
    logger.debug("ProductCatalogLoaded", path=str(path), count=len(catalog))
    return catalog

@lru_cache(maxsize=None)
def _default_catalog() -> Dict[str, Product]:
    return load_catalog()

def get_catalog() -> Dict[str, Product]:
    return dict(_default_catalog())

def find_product(jan_code: str, catalog: Optional[Mapping[str, Product]] = None) -> Optional[Product]:
    source = _default_catalog() if catalog is None else catalog
    return source.get(jan_code)

__all__ = ["Product","load_catalog","get_catalog","find_product"]
