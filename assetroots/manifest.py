"""Rule manifests: YAML/JSON descriptions of a rule's asset attributes."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Optional

import yaml

from .config import DEFAULT_OUTPUT_ROOT
from .errors import LabelSyntaxError, ManifestError
from .logging import get_logger
from .models import ContributingTarget, FileRef, Label
from .paths import as_fragment
from .resolver import ASSETS_ATTR, ASSETS_DIR_ATTR, AssetCollection, AssetResolver
from .rule import StaticRuleContext

_LOGGER = get_logger("manifest")
_DEFAULT_RULE = "//:rule"


@dataclass
class RuleManifest:
    """A parsed manifest: the rule context, or a prebuilt assets directory."""

    context: StaticRuleContext
    prebuilt: Optional[FileRef] = None

    def resolve(self, resolver: AssetResolver | None = None) -> AssetCollection:
        resolver = resolver or AssetResolver()
        if self.prebuilt is not None:
            return resolver.from_prebuilt_directory(self.prebuilt)
        return resolver.collect(self.context)


def load_manifest(path: Path, *, output_root: str = DEFAULT_OUTPUT_ROOT) -> RuleManifest:
    """Read and parse a manifest file."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"Cannot read manifest {path}: {exc}") from exc
    try:
        data = yaml.safe_load(text) if text.strip() else {}
    except yaml.YAMLError as exc:
        raise ManifestError(f"Failed to parse {path.name}: {exc}") from exc
    _LOGGER.debug("Loaded manifest %s", path)
    return parse_manifest(data or {}, output_root=output_root)


def parse_manifest(data: Any, *, output_root: str = DEFAULT_OUTPUT_ROOT) -> RuleManifest:
    """Build a ``RuleManifest`` from already-decoded manifest data."""
    if not isinstance(data, Mapping):
        raise ManifestError("Manifest must contain a mapping at the root")

    rule_label = _parse_label(data.get("rule", _DEFAULT_RULE), "rule")

    prebuilt = None
    prebuilt_path = data.get("prebuilt_assets")
    if prebuilt_path is not None:
        if ASSETS_ATTR in data:
            raise ManifestError(f"'prebuilt_assets' cannot be combined with '{ASSETS_ATTR}'")
        prebuilt = _file_ref(
            {"path": prebuilt_path, "generated": True, "directory": True},
            rule_label,
            output_root,
        )

    explicit = {}
    targets: List[ContributingTarget] = []
    if ASSETS_ATTR in data:
        targets = _parse_targets(data[ASSETS_ATTR], output_root)
        explicit[ASSETS_ATTR] = [str(target.label) for target in targets]
    if ASSETS_DIR_ATTR in data:
        assets_dir = data[ASSETS_DIR_ATTR]
        if assets_dir is not None and not isinstance(assets_dir, str):
            raise ManifestError(f"'{ASSETS_DIR_ATTR}' must be a string")
        try:
            as_fragment(assets_dir or "")
        except ValueError as exc:
            raise ManifestError(f"'{ASSETS_DIR_ATTR}': {exc}") from exc
        explicit[ASSETS_DIR_ATTR] = assets_dir or ""

    defined = (ASSETS_ATTR, ASSETS_DIR_ATTR) if data.get("defines_assets", True) else ()
    context = StaticRuleContext.build(
        rule_label,
        defined=defined,
        explicit=explicit,
        defaults={ASSETS_ATTR: [], ASSETS_DIR_ATTR: ""},
        targets={ASSETS_ATTR: targets},
    )
    return RuleManifest(context=context, prebuilt=prebuilt)


def _parse_targets(value: Any, output_root: str) -> List[ContributingTarget]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ManifestError(f"'{ASSETS_ATTR}' must be a list of targets")
    targets: List[ContributingTarget] = []
    for index, entry in enumerate(value):
        if not isinstance(entry, Mapping) or "label" not in entry:
            raise ManifestError(f"{ASSETS_ATTR}[{index}] must be a mapping with a 'label'")
        label = _parse_label(entry["label"], f"{ASSETS_ATTR}[{index}].label")
        raw_files = entry.get("files") or []
        if not isinstance(raw_files, list):
            raise ManifestError(f"{ASSETS_ATTR}[{index}].files must be a list")
        files = tuple(_file_ref(raw, label, output_root) for raw in raw_files)
        targets.append(ContributingTarget(label=label, files=files))
    return targets


def _file_ref(raw: Any, default_owner: Label, output_root: str) -> FileRef:
    if isinstance(raw, str):
        raw = {"path": raw}
    if not isinstance(raw, Mapping) or not isinstance(raw.get("path"), str):
        raise ManifestError(f"File entries need a string 'path', got {raw!r}")

    owner = default_owner
    if raw.get("owner") is not None:
        owner = _parse_label(raw["owner"], "owner")

    root = raw.get("root")
    if root is None:
        root = output_root if raw.get("generated", False) else ""
    if not isinstance(root, str):
        raise ManifestError(f"'root' of {raw['path']} must be a string")

    try:
        return FileRef.create(
            owner,
            raw["path"],
            root=root,
            is_directory=bool(raw.get("directory", False)),
        )
    except ValueError as exc:
        raise ManifestError(str(exc)) from exc


def _parse_label(value: Any, where: str) -> Label:
    if not isinstance(value, str):
        raise ManifestError(f"{where} must be a label string")
    try:
        return Label.parse(value)
    except LabelSyntaxError as exc:
        raise ManifestError(f"{where}: {exc}") from exc


__all__ = ["RuleManifest", "load_manifest", "parse_manifest"]
