"""Resolve declared build assets into files and the roots of their bundle paths."""

from .errors import (
    AssetResolutionError,
    ContainmentViolation,
    DeclarationMismatch,
    LabelSyntaxError,
    ManifestError,
)
from .models import ContributingTarget, FileRef, Label, PackageIdentifier
from .resolver import AssetCollection, AssetResolver, resolve_assets
from .rule import RuleContext, StaticRuleContext

__all__ = [
    "AssetCollection",
    "AssetResolutionError",
    "AssetResolver",
    "ContainmentViolation",
    "ContributingTarget",
    "DeclarationMismatch",
    "FileRef",
    "Label",
    "LabelSyntaxError",
    "ManifestError",
    "PackageIdentifier",
    "RuleContext",
    "StaticRuleContext",
    "resolve_assets",
]
