"""Tests for turning paths into upload candidates."""

from __future__ import annotations

from image_upscaler.parsers.image_collector import (
    collect_candidates,
    collect_image_files,
    guess_media_type,
)


def test_guess_media_type(tmp_path):
    assert guess_media_type(tmp_path / "a.PNG") == "image/png"
    assert guess_media_type(tmp_path / "b.jpg") == "image/jpeg"
    assert guess_media_type(tmp_path / "c.webp") == "image/webp"
    assert guess_media_type(tmp_path / "noext") == ""


def test_collect_image_files_sorts_and_skips_hidden(tmp_path):
    for name in ["b.png", "A.jpg", ".hidden.png", "c.gif"]:
        _ = (tmp_path / name).write_bytes(b"x")
    (tmp_path / "sub").mkdir()

    files = collect_image_files(tmp_path)

    assert [f.name for f in files] == ["A.jpg", "b.png", "c.gif"]


def test_collect_image_files_missing_folder(tmp_path):
    assert collect_image_files(tmp_path / "missing") == []


def test_collect_candidates_keeps_argument_order(tmp_path):
    folder = tmp_path / "photos"
    folder.mkdir()
    _ = (folder / "2.png").write_bytes(b"22")
    _ = (folder / "1.png").write_bytes(b"1")
    single = tmp_path / "z.webp"
    _ = single.write_bytes(b"zzz")

    candidates = collect_candidates([single, folder, tmp_path / "nope.png"])

    assert [c.name for c in candidates] == ["z.webp", "1.png", "2.png"]
    assert [c.size for c in candidates] == [3, 1, 2]
    assert candidates[0].media_type == "image/webp"
    assert candidates[1].path == folder / "1.png"


def test_collect_candidates_keeps_unsupported_files_for_validation(tmp_path):
    gif = tmp_path / "anim.gif"
    _ = gif.write_bytes(b"GIF89a")

    candidates = collect_candidates([gif])

    assert len(candidates) == 1
    assert candidates[0].media_type == "image/gif"
