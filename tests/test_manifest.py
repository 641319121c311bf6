"""Tests for assetroots.manifest."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

import pytest

from assetroots.errors import ContainmentViolation, DeclarationMismatch, ManifestError
from assetroots.manifest import load_manifest, parse_manifest


def test_load_manifest_resolves_source_and_generated_files(tmp_path: Path) -> None:
    manifest_file = tmp_path / "rule.yml"
    manifest_file.write_text(
        """
rule: "//app:bin"
assets_dir: assets
assets:
  - label: "//app:images"
    files:
      - app/assets/img/a.png
      - path: app/assets/img/b.png
        generated: true
  - label: "//lib:fonts"
    files:
      - path: lib/assets/f.ttf
        root: out/custom
""",
        encoding="utf-8",
    )

    manifest = load_manifest(manifest_file, output_root="out/cfg/bin")
    collection = manifest.resolve()

    assert [str(file) for file in collection.files] == [
        "app/assets/img/a.png",
        "out/cfg/bin/app/assets/img/b.png",
        "out/custom/lib/assets/f.ttf",
    ]
    assert collection.roots == (
        PurePosixPath("app/assets"),
        PurePosixPath("out/cfg/bin/app/assets"),
        PurePosixPath("out/custom/lib/assets"),
    )
    assert str(manifest.context.label) == "//app:bin"


def test_parse_manifest_explicit_flags_follow_key_presence() -> None:
    manifest = parse_manifest({"assets": []})
    context = manifest.context

    assert context.is_attribute_explicitly_specified("assets")
    assert not context.is_attribute_explicitly_specified("assets_dir")
    with pytest.raises(DeclarationMismatch):
        manifest.resolve()


def test_parse_manifest_without_asset_keys_is_empty() -> None:
    collection = parse_manifest({"rule": "//app:bin"}).resolve()

    assert collection.is_empty


def test_parse_manifest_respects_defines_assets_flag() -> None:
    manifest = parse_manifest({"defines_assets": False})

    assert not manifest.context.has_attribute("assets")
    assert manifest.resolve().is_empty


def test_parse_manifest_owner_override_changes_package_root() -> None:
    manifest = parse_manifest(
        {
            "assets_dir": "assets",
            "assets": [
                {
                    "label": "//app:all",
                    "files": [{"path": "app/sub/assets/a.txt", "owner": "//app/sub:a"}],
                }
            ],
        }
    )

    collection = manifest.resolve()

    assert str(collection.files[0].owner) == "//app/sub:a"
    assert collection.roots == (PurePosixPath("app/sub/assets"),)


def test_parse_manifest_containment_error_is_reported_on_context() -> None:
    manifest = parse_manifest(
        {
            "assets_dir": "assets",
            "assets": [{"label": "//app:res", "files": ["app/res/a.txt"]}],
        }
    )

    with pytest.raises(ContainmentViolation):
        manifest.resolve()

    assert manifest.context.errors[0].attribute == "assets"


def test_parse_manifest_prebuilt_assets() -> None:
    manifest = parse_manifest(
        {"rule": "//lib:aar", "prebuilt_assets": "lib/_aar/assets_tree"},
        output_root="out/bin",
    )

    collection = manifest.resolve()

    assert [str(file) for file in collection.files] == ["out/bin/lib/_aar/assets_tree"]
    assert collection.roots == (PurePosixPath("out/bin/lib/_aar/assets_tree/assets"),)


@pytest.mark.parametrize(
    "data",
    [
        ["not", "a", "mapping"],
        {"rule": 7},
        {"rule": "app:bin"},
        {"assets": "//app:res"},
        {"assets": [{"files": []}]},
        {"assets": [{"label": "//app:res", "files": "app/a.txt"}]},
        {"assets": [{"label": "//app:res", "files": [{"root": "out"}]}]},
        {"assets": [{"label": "//app:res", "files": ["/abs/a.txt"]}]},
        {"assets_dir": 3},
        {"assets": [], "prebuilt_assets": "lib/tree"},
        {"assets_dir": "../up", "assets": []},
        {"assets_dir": "/abs/assets", "assets": []},
        {"rule": "//a/../b:x"},
        {"assets": [{"label": "//app/../lib:res", "files": []}]},
    ],
)
def test_parse_manifest_rejects_malformed_data(data: object) -> None:
    with pytest.raises(ManifestError):
        parse_manifest(data)


def test_load_manifest_reports_yaml_errors(tmp_path: Path) -> None:
    manifest_file = tmp_path / "broken.yml"
    manifest_file.write_text("assets: [unclosed\n", encoding="utf-8")

    with pytest.raises(ManifestError):
        load_manifest(manifest_file)


def test_load_manifest_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ManifestError):
        load_manifest(tmp_path / "missing.yml")
