"""Resolution of a rule's declared assets into files and asset roots."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .errors import AssetResolutionError, ContainmentViolation, DeclarationMismatch
from .logging import get_logger
from .models import ContributingTarget, FileRef
from .paths import as_fragment, is_beneath, render, segment_count, truncate
from .rule import RuleContext

ASSETS_ATTR = "assets"
ASSETS_DIR_ATTR = "assets_dir"
PREBUILT_ASSETS_DIR = "assets"

_LOGGER = get_logger("resolver")


@dataclass(frozen=True)
class AssetCollection:
    """Ordered asset files paired index-for-index with their asset roots."""

    files: Tuple[FileRef, ...] = ()
    roots: Tuple[PurePosixPath, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "files", tuple(self.files))
        object.__setattr__(self, "roots", tuple(self.roots))
        if len(self.files) != len(self.roots):
            raise ValueError(
                f"Got {len(self.files)} asset files but {len(self.roots)} asset roots"
            )

    def __len__(self) -> int:
        return len(self.files)

    @property
    def is_empty(self) -> bool:
        return not self.files

    def pairs(self) -> Iterator[Tuple[FileRef, PurePosixPath]]:
        return iter(zip(self.files, self.roots))

    def bundle_paths(self) -> List[PurePosixPath]:
        """Path of each asset inside the bundle: its exec path with the root stripped."""
        return [file.exec_path.relative_to(root) for file, root in self.pairs()]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "assets": [
                {
                    "exec_path": render(file.exec_path),
                    "owner": str(file.owner),
                    "root": render(root),
                    "bundle_path": render(file.exec_path.relative_to(root)),
                }
                for file, root in self.pairs()
            ]
        }


_EMPTY = AssetCollection()


class AssetResolver:
    """Collects the asset files of a rule and the roots their bundle paths start at."""

    def __init__(self, files_attr: str = ASSETS_ATTR, dir_attr: str = ASSETS_DIR_ATTR) -> None:
        self.files_attr = files_attr
        self.dir_attr = dir_attr

    @staticmethod
    def empty() -> AssetCollection:
        return _EMPTY

    def validate_declaration(self, has_files_attr: bool, has_dir_attr: bool) -> None:
        """Both attributes must be set together or not at all."""
        if bool(has_files_attr) ^ bool(has_dir_attr):
            raise DeclarationMismatch(self.files_attr, self.dir_attr)

    def resolve(
        self,
        base_dir: Optional[Union[str, PurePosixPath]],
        targets: Iterable[ContributingTarget],
    ) -> AssetCollection:
        """Pair every contributed file with its asset root.

        ``base_dir`` of ``None`` means the rule has no files attribute; the
        result is then empty. The first file outside ``base_dir`` aborts
        resolution with ``ContainmentViolation``.
        """
        if base_dir is None:
            return _EMPTY

        assets_dir = as_fragment(base_dir)
        files: List[FileRef] = []
        roots: List[PurePosixPath] = []

        for target in targets:
            for file in target.files:
                package_relative = self._package_relative_path(file)
                if package_relative is None or not is_beneath(package_relative, assets_dir):
                    _LOGGER.warning(
                        "%s from %s is outside %s",
                        file.root_relative_path,
                        target.label,
                        render(assets_dir),
                    )
                    raise ContainmentViolation(file.root_relative_path, target.label, assets_dir)
                relative = package_relative.relative_to(assets_dir)
                exec_path = file.exec_path
                root = truncate(exec_path, segment_count(relative))
                _LOGGER.debug("Asset %s rooted at %s", exec_path, render(root))
                files.append(file)
                roots.append(root)

        if not files:
            return _EMPTY
        _LOGGER.info("Resolved %d asset(s) beneath '%s'", len(files), render(assets_dir))
        return AssetCollection(tuple(files), tuple(roots))

    def from_prebuilt_directory(self, directory: FileRef) -> AssetCollection:
        """Treat an opaque directory output as a single asset rooted at its ``assets/`` child.

        Individual members are unknown until the directory is built, so no
        containment check happens here.
        """
        if not directory.is_directory:
            raise ValueError(f"'{directory}' is not a directory output")
        return AssetCollection((directory,), (directory.exec_path / PREBUILT_ASSETS_DIR,))

    def collect(self, rule: RuleContext) -> AssetCollection:
        """Validate and resolve the assets declared by ``rule``.

        Failures are reported on the rule before the exception propagates.
        """
        try:
            self.validate_declaration(
                rule.is_attribute_explicitly_specified(self.files_attr),
                rule.is_attribute_explicitly_specified(self.dir_attr),
            )
        except DeclarationMismatch as exc:
            rule.rule_error(str(exc))
            raise

        if not rule.has_attribute(self.files_attr):
            return _EMPTY

        base_dir = rule.get_attribute(self.dir_attr) or ""
        try:
            return self.resolve(base_dir, rule.prerequisites(self.files_attr))
        except AssetResolutionError as exc:
            rule.attribute_error(self.files_attr, str(exc))
            raise

    @staticmethod
    def _package_relative_path(file: FileRef) -> Optional[PurePosixPath]:
        try:
            return file.package_relative_path
        except ValueError:
            return None


def resolve_assets(
    base_dir: Optional[Union[str, PurePosixPath]], targets: Sequence[ContributingTarget]
) -> AssetCollection:
    """Module-level shortcut for ``AssetResolver().resolve``."""
    return AssetResolver().resolve(base_dir, targets)


__all__ = [
    "ASSETS_ATTR",
    "ASSETS_DIR_ATTR",
    "AssetCollection",
    "AssetResolver",
    "PREBUILT_ASSETS_DIR",
    "resolve_assets",
]
