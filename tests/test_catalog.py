import json

import pytest

from insightai.exceptions import CatalogError
from insightai.models.catalog import default_catalog, load_catalog, parse_catalog


def _entry(**overrides):
    entry = {
        "id": "llama-3.1-8b-q4",
        "name": "Llama 3.1 8B Instruct",
        "family": "llama",
        "size_params": "8B",
        "quantization": "Q4_K_M",
        "req_vram_gb": 6,
        "req_ram_gb": 8,
        "tags": ["general", "chat"],
    }
    entry.update(overrides)
    return entry


def test_bundled_catalog_is_valid():
    catalog = load_catalog()
    assert len(catalog) > 20
    assert len({m.id for m in catalog}) == len(catalog)
    assert all(m.tags for m in catalog)
    assert any("vision" in m.tags for m in catalog)
    assert any("dev" in m.tags for m in catalog)


def test_default_catalog_is_loaded_once():
    assert default_catalog() is default_catalog()


def test_load_from_file(tmp_path):
    path = tmp_path / "models.json"
    path.write_text(json.dumps([_entry(), _entry(id="other", name="Other 3B")]))
    catalog = load_catalog(path)
    assert [m.id for m in catalog] == ["llama-3.1-8b-q4", "other"]
    assert catalog[0].tags == frozenset({"general", "chat"})


def test_duplicate_ids_rejected():
    with pytest.raises(CatalogError, match="duplicate model id"):
        parse_catalog([_entry(), _entry()])


@pytest.mark.parametrize("bad", [
    {"req_vram_gb": 0},
    {"req_ram_gb": -1},
    {"id": ""},
])
def test_invalid_entries_rejected(bad):
    with pytest.raises(CatalogError, match="entry 0 is invalid"):
        parse_catalog([_entry(**bad)])


def test_missing_requirement_rejected():
    entry = _entry()
    del entry["req_ram_gb"]
    with pytest.raises(CatalogError):
        parse_catalog([entry])


def test_not_a_list_rejected():
    with pytest.raises(CatalogError, match="JSON list"):
        parse_catalog({"models": []})


def test_invalid_json_reports_path(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[{")
    with pytest.raises(CatalogError) as excinfo:
        load_catalog(path)
    assert excinfo.value.path == str(path)


def test_missing_file(tmp_path):
    with pytest.raises(CatalogError):
        load_catalog(tmp_path / "absent.json")


def test_empty_catalog_is_allowed():
    assert parse_catalog([]) == ()
