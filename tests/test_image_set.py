from __future__ import annotations

import os
from pathlib import Path

import pytest

from picstorm.errors import EmptyDirectoryError
from picstorm.image_set import ImageSet


def _names(image_set: ImageSet) -> list[str]:
    return [Path(p).name for p in image_set.entries]


def test_build_filters_extensions_case_insensitively_and_sorts(image_dir: Path) -> None:
    images = ImageSet.build_from(image_dir / "b.PNG")

    assert _names(images) == ["a.jpg", "b.PNG", "c.gif"]
    assert Path(images.directory) == image_dir


def test_directories_with_image_suffix_are_skipped(image_dir: Path) -> None:
    images = ImageSet.build_from(image_dir / "a.jpg")
    assert "folder.jpg" not in _names(images)


def test_selected_file_sets_current_index(image_dir: Path) -> None:
    images = ImageSet.build_from(image_dir / "c.gif")

    assert images.current_index == 2
    assert Path(images.current()).name == "c.gif"


def test_unrecognized_selection_defaults_to_first_image(image_dir: Path) -> None:
    images = ImageSet.build_from(image_dir / "notes.txt")

    assert images.current_index == 0
    assert Path(images.current()).name == "a.jpg"


def test_missing_selection_defaults_to_first_image(image_dir: Path) -> None:
    images = ImageSet.build_from(image_dir / "gone.png")
    assert images.current_index == 0


def test_empty_folder_raises(tmp_path: Path) -> None:
    (tmp_path / "readme.md").write_text("no images here", encoding="utf-8")

    with pytest.raises(EmptyDirectoryError) as info:
        ImageSet.build_from(tmp_path / "readme.md")
    assert Path(info.value.directory) == tmp_path


def test_missing_folder_raises_file_not_found(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        ImageSet.build_from(tmp_path / "nope" / "x.jpg")


def test_next_wraps_to_first(image_dir: Path) -> None:
    images = ImageSet.build_from(image_dir / "c.gif")

    assert Path(images.next()).name == "a.jpg"
    assert images.current_index == 0


def test_previous_wraps_to_last(image_dir: Path) -> None:
    images = ImageSet.build_from(image_dir / "a.jpg")

    assert Path(images.previous()).name == "c.gif"
    assert images.current_index == 2


def test_full_cycle_returns_to_start(image_dir: Path) -> None:
    images = ImageSet.build_from(image_dir / "b.PNG")
    for _ in range(len(images)):
        images.next()
    assert images.current_index == 1


def test_lookup_helpers(image_dir: Path) -> None:
    images = ImageSet.build_from(image_dir / "b.PNG")

    assert len(images) == 3
    assert images.position_label() == "2/3"
    assert images.contains(image_dir / "c.gif")
    assert not images.contains(image_dir / "notes.txt")
    assert images.index_of(image_dir / "a.jpg") == 0
    assert images.index_of(image_dir / "notes.txt") == -1


def test_constructor_rejects_empty_entries() -> None:
    with pytest.raises(EmptyDirectoryError):
        ImageSet("/tmp/empty", [])


def _symlink(link: Path, target: Path) -> None:
    try:
        os.symlink(target, link)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not available")


def test_symlinked_selection_browses_its_own_folder(tmp_path: Path) -> None:
    photos = tmp_path / "photos"
    store = tmp_path / "store"
    photos.mkdir()
    store.mkdir()
    (store / "real.jpg").write_bytes(b"x")
    (photos / "other.png").write_bytes(b"x")
    _symlink(photos / "link.jpg", store / "real.jpg")

    images = ImageSet.build_from(photos / "link.jpg")

    assert Path(images.directory) == photos
    assert _names(images) == ["link.jpg", "other.png"]
    assert Path(images.current()).name == "link.jpg"


def test_symlinked_entries_keep_their_own_names(tmp_path: Path) -> None:
    folder = tmp_path / "d"
    folder.mkdir()
    (tmp_path / "zzz.jpg").write_bytes(b"x")
    (folder / "b.jpg").write_bytes(b"x")
    _symlink(folder / "a.jpg", Path("..") / "zzz.jpg")

    images = ImageSet.build_from(folder / "b.jpg")

    assert _names(images) == ["a.jpg", "b.jpg"]
    assert images.current_index == 1


def test_link_to_sibling_is_listed_once_under_each_name(tmp_path: Path) -> None:
    (tmp_path / "a.jpg").write_bytes(b"x")
    _symlink(tmp_path / "b.jpg", tmp_path / "a.jpg")

    images = ImageSet.build_from(tmp_path / "b.jpg")

    assert _names(images) == ["a.jpg", "b.jpg"]
    assert images.current_index == 1


def test_relative_parent_components_are_collapsed(image_dir: Path) -> None:
    images = ImageSet.build_from(image_dir / "folder.jpg" / ".." / "c.gif")
    assert images.current_index == 2
    assert Path(images.directory) == image_dir
