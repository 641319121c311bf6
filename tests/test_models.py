"""Tests for labels and file references."""

from __future__ import annotations

from pathlib import PurePosixPath

import pytest

from assetroots.errors import LabelSyntaxError
from assetroots.models import ContributingTarget, FileRef, Label, PackageIdentifier


def test_label_parse_main_repository() -> None:
    label = Label.parse("//java/com/app:res")

    assert label.package_id == PackageIdentifier("", PurePosixPath("java/com/app"))
    assert label.name == "res"
    assert str(label) == "//java/com/app:res"


def test_label_parse_defaults_name_to_last_package_segment() -> None:
    label = Label.parse("//java/com/app")

    assert label.name == "app"
    assert str(label) == "//java/com/app:app"


def test_label_parse_external_repository() -> None:
    label = Label.parse("@fonts//ttf:all")

    assert label.package_id.repository == "fonts"
    assert label.package_id.source_root == PurePosixPath("external/fonts/ttf")
    assert str(label) == "@fonts//ttf:all"


def test_label_parse_root_package() -> None:
    label = Label.parse("//:rule")

    assert label.package == PurePosixPath(".")
    assert label.package_id.source_root == PurePosixPath(".")
    assert str(label) == "//:rule"


@pytest.mark.parametrize(
    "text",
    ["pkg:name", "@//pkg:name", "@repo", "//pkg:", "//pkg//sub:name", "//pkg/:name", "//a/../b:x"],
)
def test_label_parse_rejects_malformed_labels(text: str) -> None:
    with pytest.raises(LabelSyntaxError):
        Label.parse(text)


def test_file_ref_paths_for_generated_file() -> None:
    file = FileRef.create("//app/res:gen", "app/res/assets/a.png", root="bazel-out/cfg/bin")

    assert file.exec_path == PurePosixPath("bazel-out/cfg/bin/app/res/assets/a.png")
    assert file.package_relative_path == PurePosixPath("assets/a.png")
    assert not file.is_source
    assert str(file) == "bazel-out/cfg/bin/app/res/assets/a.png"


def test_file_ref_paths_for_source_file() -> None:
    file = FileRef.create("//app:res", "app/assets/a.png")

    assert file.is_source
    assert file.exec_path == PurePosixPath("app/assets/a.png")
    assert file.exec_path.parts[-2:] == file.package_relative_path.parts


def test_file_ref_outside_owner_package_has_no_package_relative_path() -> None:
    file = FileRef.create("//app:res", "lib/a.png")

    with pytest.raises(ValueError):
        _ = file.package_relative_path


def test_file_ref_rejects_absolute_paths() -> None:
    with pytest.raises(ValueError):
        FileRef.create("//app:res", "/app/a.png")


def test_contributing_target_freezes_files() -> None:
    label = Label.parse("//app:res")
    files = [FileRef.create(label, "app/a.png")]

    target = ContributingTarget(label=label, files=files)
    files.append(FileRef.create(label, "app/b.png"))

    assert len(target.files) == 1
    assert isinstance(target.files, tuple)
