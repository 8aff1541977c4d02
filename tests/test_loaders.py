import json

import pytest
from PIL import Image

from collage.utils.loaders import ensure_items_dir, load_items, load_manifest


def _img(path, size):
    Image.new("RGB", size, (10, 10, 10)).save(path)


def test_load_items_sorted_with_intrinsic_sizes(tmp_path):
    _img(tmp_path / "b.png", (30, 20))
    _img(tmp_path / "a.jpg", (10, 40))
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
    items = load_items(tmp_path)
    assert [m.filename for m in items] == ["a.jpg", "b.png"]
    assert items[0].rendered_size(1.0) == (10.0, 40.0)
    assert items[1].rendered_size(0.5) == (15.0, 10.0)


def test_load_items_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_items(tmp_path / "missing")
    with pytest.raises(ValueError):
        load_items(tmp_path)


def test_manifest_order_and_size_overrides(tmp_path):
    _img(tmp_path / "a.png", (10, 10))
    _img(tmp_path / "b.png", (20, 20))
    manifest = tmp_path / "collage.json"
    manifest.write_text(
        json.dumps([{"filename": "b.png", "width": 50}, {"filename": "a.png"}]),
        encoding="utf-8",
    )
    assert ensure_items_dir(tmp_path) == manifest
    items = load_manifest(manifest, tmp_path)
    assert [m.filename for m in items] == ["b.png", "a.png"]
    # explicit width wins, height still follows scale
    assert items[0].rendered_size(2.0) == (50.0, 40.0)
    assert items[1].rendered_size(1.0) == (10.0, 10.0)


def test_manifest_missing_image(tmp_path):
    manifest = tmp_path / "collage.json"
    manifest.write_text(json.dumps({"items": [{"filename": "ghost.png"}]}), encoding="utf-8")
    with pytest.raises(FileNotFoundError):
        load_manifest(manifest, tmp_path)


def test_ensure_items_dir_without_manifest(tmp_path):
    assert ensure_items_dir(tmp_path) is None
    with pytest.raises(FileNotFoundError):
        ensure_items_dir(tmp_path / "nope")
