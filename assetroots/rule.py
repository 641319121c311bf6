"""Rule configuration seen by the resolver: attribute values, flags and prerequisites."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Protocol, Sequence, Tuple

from .models import ContributingTarget, Label


class RuleContext(Protocol):
    """Read-only view of a configured rule plus its error reporting channel."""

    label: Label

    def is_attribute_explicitly_specified(self, name: str) -> bool:
        """Return True when the rule author set ``name`` rather than leaving the default."""

    def has_attribute(self, name: str) -> bool:
        """Return True when the rule class defines ``name`` at all."""

    def get_attribute(self, name: str) -> Any:
        """Return the value of ``name``; undefined attributes raise ``KeyError``."""

    def prerequisites(self, name: str) -> Sequence[ContributingTarget]:
        """Return the file-producing targets listed under ``name``, in declaration order."""

    def attribute_error(self, name: str, message: str) -> None:
        """Attach ``message`` to attribute ``name``."""

    def rule_error(self, message: str) -> None:
        """Attach ``message`` to the rule as a whole."""


@dataclass
class ReportedError:
    """An error message recorded against a rule or one of its attributes."""

    message: str
    attribute: str | None = None


@dataclass
class StaticRuleContext:
    """In-memory ``RuleContext`` built from already-known attribute values.

    ``defined`` lists the attributes the rule class declares; ``explicit`` holds
    the subset the rule author actually set, with their values. Attributes in
    ``defined`` but not in ``explicit`` read back as their ``defaults`` entry.
    """

    label: Label
    defined: Tuple[str, ...] = ()
    explicit: Dict[str, Any] = field(default_factory=dict)
    defaults: Dict[str, Any] = field(default_factory=dict)
    targets: Dict[str, Tuple[ContributingTarget, ...]] = field(default_factory=dict)
    errors: List[ReportedError] = field(default_factory=list)

    @classmethod
    def build(
        cls,
        label: Label | str,
        *,
        defined: Sequence[str],
        explicit: Mapping[str, Any] | None = None,
        defaults: Mapping[str, Any] | None = None,
        targets: Mapping[str, Sequence[ContributingTarget]] | None = None,
    ) -> "StaticRuleContext":
        return cls(
            label=Label.parse(label) if isinstance(label, str) else label,
            defined=tuple(defined),
            explicit=dict(explicit or {}),
            defaults=dict(defaults or {}),
            targets={name: tuple(items) for name, items in (targets or {}).items()},
        )

    def is_attribute_explicitly_specified(self, name: str) -> bool:
        return name in self.explicit

    def has_attribute(self, name: str) -> bool:
        return name in self.defined

    def get_attribute(self, name: str) -> Any:
        if name not in self.defined:
            raise KeyError(f"No such attribute '{name}' in rule {self.label}")
        if name in self.explicit:
            return self.explicit[name]
        return self.defaults.get(name)

    def prerequisites(self, name: str) -> Sequence[ContributingTarget]:
        return self.targets.get(name, ())

    def attribute_error(self, name: str, message: str) -> None:
        self.errors.append(ReportedError(message=message, attribute=name))

    def rule_error(self, message: str) -> None:
        self.errors.append(ReportedError(message=message))


__all__ = ["ReportedError", "RuleContext", "StaticRuleContext"]
