"""Core data models shared across assetroots components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Tuple, Union

from .errors import LabelSyntaxError
from .paths import as_fragment

EXTERNAL_DIR = "external"

PathLike = Union[str, PurePosixPath]


@dataclass(frozen=True)
class PackageIdentifier:
    """A package within a repository; the main repository has an empty name."""

    repository: str
    package: PurePosixPath

    @property
    def is_main(self) -> bool:
        return not self.repository

    @property
    def source_root(self) -> PurePosixPath:
        """Path of the package measured from the execution root."""
        if self.is_main:
            return self.package
        return PurePosixPath(EXTERNAL_DIR, self.repository) / self.package

    def __str__(self) -> str:
        package = "" if self.package == PurePosixPath(".") else self.package.as_posix()
        prefix = f"@{self.repository}" if self.repository else ""
        return f"{prefix}//{package}"


@dataclass(frozen=True)
class Label:
    """Build target label such as ``//app/res:images`` or ``@lib//pkg:name``."""

    package_id: PackageIdentifier
    name: str

    @classmethod
    def parse(cls, text: str) -> "Label":
        raw = text.strip()
        repository = ""
        if raw.startswith("@"):
            if "//" not in raw:
                raise LabelSyntaxError(f"Invalid label '{text}': missing '//'")
            repository, raw = raw[1:].split("//", 1)
            raw = "//" + raw
            if not repository:
                raise LabelSyntaxError(f"Invalid label '{text}': empty repository name")
        if not raw.startswith("//"):
            raise LabelSyntaxError(f"Invalid label '{text}': labels must be absolute")
        body = raw[2:]
        if ":" in body:
            package, name = body.split(":", 1)
        else:
            package = body
            name = package.rsplit("/", 1)[-1]
        if not name:
            raise LabelSyntaxError(f"Invalid label '{text}': empty target name")
        if package.startswith("/") or package.endswith("/") or "//" in package:
            raise LabelSyntaxError(f"Invalid label '{text}': malformed package '{package}'")
        try:
            package_path = as_fragment(package)
        except ValueError as exc:
            raise LabelSyntaxError(f"Invalid label '{text}': {exc}") from exc
        return cls(
            package_id=PackageIdentifier(repository, package_path),
            name=name,
        )

    @property
    def package(self) -> PurePosixPath:
        return self.package_id.package

    def __str__(self) -> str:
        return f"{self.package_id}:{self.name}"


@dataclass(frozen=True)
class FileRef:
    """A build input or output, identified by its owner, artifact root and path.

    ``root`` is the exec path of the artifact root: empty for source files and
    an output directory such as ``bazel-out/k8-fastbuild/bin`` for generated
    files. ``root_relative_path`` is measured from that root.
    """

    owner: Label
    root: PurePosixPath
    root_relative_path: PurePosixPath
    is_directory: bool = False

    @classmethod
    def create(
        cls,
        owner: Label | str,
        path: PathLike,
        *,
        root: PathLike = "",
        is_directory: bool = False,
    ) -> "FileRef":
        label = Label.parse(owner) if isinstance(owner, str) else owner
        return cls(
            owner=label,
            root=as_fragment(root),
            root_relative_path=as_fragment(path),
            is_directory=is_directory,
        )

    @property
    def exec_path(self) -> PurePosixPath:
        return self.root / self.root_relative_path

    @property
    def is_source(self) -> bool:
        return self.root == PurePosixPath(".")

    @property
    def package_relative_path(self) -> PurePosixPath:
        """Path measured from the source root of the owning package.

        Raises ``ValueError`` when the file does not live under its owner's package.
        """
        return self.root_relative_path.relative_to(self.owner.package_id.source_root)

    def __str__(self) -> str:
        return self.exec_path.as_posix()


@dataclass(frozen=True)
class ContributingTarget:
    """An upstream target and the files it produces, in producer order."""

    label: Label
    files: Tuple[FileRef, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "files", tuple(self.files))
