"""
Rule group registry.

Each rule module declares its group via RULE_GROUP and its checks via RULES.
The checker calls discover_rules() to collect every available Rule.

To add a new rule group:
  1. Create rules/my_rules.py (no underscore prefix)
  2. Write detect functions: (ctx: PropertyContext) -> list[dict]
     Each dict is one violation; its keys fill the Rule's message template.
     A "path" key overrides the pointer the Finding is reported at.
  3. Set RULE_GROUP and RULES in your module
  4. The registry auto-discovers it
"""

import importlib
import logging
import pkgutil
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Tuple

from convention_check.models import Finding
from convention_check.utils import get_properties, resolve_ref

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PropertyContext:
    """Everything a rule may look at for one declared property."""
    name: str
    path: str
    schema: Mapping                 # the property's own definition
    siblings: Mapping               # the enclosing ``properties`` mapping
    parent_path: str                # pointer of the enclosing ``properties`` mapping
    root: Mapping                   # the whole document, for $ref lookups
    hint: Optional[str] = None      # referenced type from an external annotation

    @property
    def resolved(self) -> Optional[Mapping]:
        """The property definition with any local $ref followed."""
        return resolve_ref(self.root, self.schema)

    @property
    def properties(self) -> Optional[Mapping]:
        """Nested properties of the (resolved) definition, if well-formed."""
        return get_properties(self.resolved)


DetectFn = Callable[[PropertyContext], List[Dict[str, Any]]]


@dataclass(frozen=True)
class Rule:
    """A named, immutable convention check.

    ``fields`` is the vocabulary of property names the rule applies to
    (exact, case-sensitive); None means every property.
    """
    name: str
    group: str
    severity: str
    message: str
    detect: DetectFn
    fields: Optional[FrozenSet[str]] = None
    description: str = ""

    def applies_to(self, name: str) -> bool:
        return self.fields is None or name in self.fields

    def evaluate(self, ctx: PropertyContext) -> List[Finding]:
        findings = []
        for params in self.detect(ctx) or []:
            values = {"name": ctx.name, "path": ctx.path}
            values.update(params)
            findings.append(Finding(
                rule=self.name,
                path=values["path"],
                message=self.message.format(**values),
                severity=self.severity,
            ))
        return findings


# ── Registry ─────────────────────────────────────────────────

_REGISTRY: Dict[str, Tuple[Rule, ...]] = {}


def register_group(group_name: str, rules) -> None:
    """Register a rule group.

    Args:
        group_name: Unique group identifier (e.g. 'money', 'address').
        rules: Iterable of Rule objects belonging to the group.
    """
    _REGISTRY[group_name] = tuple(rules)


def discover_rules() -> Tuple[Rule, ...]:
    """Auto-import all rule modules in this package and return every Rule."""
    for _importer, modname, _ispkg in sorted(pkgutil.iter_modules(__path__), key=lambda m: m[1]):
        if modname.startswith("_"):
            continue
        try:
            mod = importlib.import_module(f"{__name__}.{modname}")
        except Exception as e:
            logger.warning("Could not load rule module '%s.%s': %s", __name__, modname, e)
            continue
        if hasattr(mod, "RULE_GROUP") and hasattr(mod, "RULES"):
            register_group(mod.RULE_GROUP, mod.RULES)

    return get_rules()


def get_rules() -> Tuple[Rule, ...]:
    """Return currently registered rules (without re-discovering)."""
    return tuple(rule for group in sorted(_REGISTRY) for rule in _REGISTRY[group])
