"""
Centralized path helpers (works with the current flat layout).
"""
from __future__ import annotations
from pathlib import Path

# This file lives at scanbrawl/core/paths.py
ROOT = Path(__file__).resolve().parents[2]   # project root (one up from 'scanbrawl')
ASSETS = ROOT / "assets"
PRODUCTS = ASSETS / "products"
PRODUCT_CATALOG = PRODUCTS / "catalog.json"
SCHEMA = ROOT / "schema"
