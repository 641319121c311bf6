"""Exception types raised while resolving assets."""

from __future__ import annotations

from pathlib import PurePosixPath


class AssetResolutionError(RuntimeError):
    """Base class for failures that abort a rule's asset resolution."""


class DeclarationMismatch(AssetResolutionError):
    """Raised when only one of the paired asset attributes was set."""

    def __init__(self, files_attr: str, dir_attr: str) -> None:
        self.files_attr = files_attr
        self.dir_attr = dir_attr
        super().__init__(
            f"'{files_attr}' and '{dir_attr}' should be either both empty or both non-empty"
        )


class ContainmentViolation(AssetResolutionError):
    """Raised when a contributed file does not live beneath the asset directory."""

    def __init__(self, path: PurePosixPath, label: object, base_dir: PurePosixPath) -> None:
        self.path = path
        self.label = label
        self.base_dir = base_dir
        super().__init__(
            f"'{path.as_posix()}' (generated by '{label}') is not beneath '{base_dir.as_posix()}'"
        )


class LabelSyntaxError(ValueError):
    """Raised when a target label cannot be parsed."""


class ManifestError(ValueError):
    """Raised when a rule manifest is malformed."""


__all__ = [
    "AssetResolutionError",
    "ContainmentViolation",
    "DeclarationMismatch",
    "LabelSyntaxError",
    "ManifestError",
]
