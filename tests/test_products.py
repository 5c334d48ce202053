import json
import pytest

from scanbrawl.data.products import load_catalog, find_product, get_catalog
from scanbrawl.core.errors import DataLoadError


def test_bundled_catalog():
    catalog = get_catalog()
    assert len(catalog) == 5
    p = find_product("4901777289628")
    assert p.name == "Suntory Premium Highball"
    assert p.is_campaign
    assert find_product("0000000000000") is None


def test_missing_file_is_empty(tmp_path):
    assert load_catalog(tmp_path / "nope.json") == {}


def test_schema_violation(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"123": {"name": "X", "category": "Food", "price": "cheap"}}))
    with pytest.raises(DataLoadError):
        load_catalog(path)


def test_unparseable_file(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text("{")
    with pytest.raises(DataLoadError):
        load_catalog(path)


def test_custom_catalog_lookup(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"42": {"name": "Answer Soda", "category": "Beverage", "price": 151}}))
    catalog = load_catalog(path)
    assert find_product("42", catalog).price == 151
    assert find_product("4901777289628", catalog) is None
