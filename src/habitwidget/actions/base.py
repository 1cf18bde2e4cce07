"""
Tap action descriptions.

A widget exposes exactly one action: open the host app at its default entry
point. The action is a plain immutable value; platforms turn it into their
own pending-action mechanism.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Tuple

logger = logging.getLogger(__name__)

# Reuse an existing pending action for the same target instead of adding one
FLAG_UPDATE_CURRENT = "update_current"
# No other process may change the action's target or parameters
FLAG_IMMUTABLE = "immutable"

DEFAULT_FLAGS = frozenset({FLAG_UPDATE_CURRENT, FLAG_IMMUTABLE})


@dataclass(frozen=True)
class AppEntryPoint:
    """
    Explicit component the tap action resolves to.

    Attributes:
        package: Application package/bundle identifier
        component: Entry point within the package (e.g. ".MainActivity")
    """

    package: str
    component: str

    @classmethod
    def parse(cls, value: str) -> "AppEntryPoint":
        """
        Parse ``package/component`` notation.

        A component starting with "." is relative to the package.

        Raises:
            ValueError: If value is not in ``package/component`` form
        """
        package, sep, component = value.partition("/")
        if not sep or not package or not component:
            raise ValueError(f"Entry point must be 'package/component', got {value!r}")
        return cls(package=package, component=component)

    @property
    def qualified_name(self) -> str:
        if self.component.startswith("."):
            return f"{self.package}{self.component}"
        return self.component

    def __str__(self) -> str:
        return f"{self.package}/{self.component}"


@dataclass(frozen=True)
class TapAction:
    """
    "Open host app" action bound to a widget's tap region.

    Attributes:
        target: Explicit entry point; never resolved by intent matching
        request_code: Distinguishes pending actions for the same target
        flags: Pending action flags (see FLAG_*)
        parameters: Launch parameters; always empty for the widget tap
    """

    target: AppEntryPoint
    request_code: int = 0
    flags: FrozenSet[str] = field(default=DEFAULT_FLAGS)
    parameters: Tuple[Tuple[str, Any], ...] = ()

    @property
    def immutable(self) -> bool:
        return FLAG_IMMUTABLE in self.flags

    @property
    def update_current(self) -> bool:
        return FLAG_UPDATE_CURRENT in self.flags

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target": str(self.target),
            "request_code": self.request_code,
            "flags": sorted(self.flags),
            "parameters": dict(self.parameters),
        }
