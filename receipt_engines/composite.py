"""
Module: receipt_engines.composite
Responsibility:
    Combine several tax rules into one.  The composite's tax is the sum of
    each child's independently rounded tax, so an item taxed at 18% + 3% +
    5% pays round(18%) + round(3%) + round(5%), never round(26%).

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Children are captured as an immutable tuple at construction time.
    - Empty composite == NoTaxRule: zero for any value.
    - No cycles: a composite is never reachable from its own children, and
      the child graph holds no cycle of its own.  Checked once, when the
      composite is built, so compute_tax() always terminates.
    - Duplicate children are allowed (a rule listed twice is charged
      twice); they are logged as a warning.

Failure modes:
    - CyclicCompositeError when the rule graph contains a cycle.
    - ConfigurationError when a child is not a TaxRule.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from receipt_kernel.domain.values import Money
from receipt_kernel.exceptions import ConfigurationError, CyclicCompositeError
from receipt_kernel.logging_config import get_logger
from receipt_engines.rules import TaxRule, rule_label

logger = get_logger("engines.composite")

_EXHAUSTED = object()


def find_cycle(root: TaxRule) -> list[str] | None:
    """
    Depth-first search for a cycle reachable from root.

    Rules are tracked by identity, so equal-but-distinct rules never count
    as a cycle.  Each rule is expanded at most once, and the walk keeps
    an explicit stack, so deeply nested composites are checked too.

    Returns:
        Rule names along the cycle (first and last name are the same rule),
        or None when the graph is acyclic.
    """
    done: set[int] = set()
    path: list[TaxRule] = [root]
    on_path: set[int] = {id(root)}
    # One child iterator per rule on the path; nesting depth is unbounded
    pending: list[Iterator[TaxRule]] = [iter(root.children())]

    while pending:
        child = next(pending[-1], _EXHAUSTED)
        if child is _EXHAUSTED:
            finished = path.pop()
            pending.pop()
            on_path.discard(id(finished))
            done.add(id(finished))
            continue
        if id(child) in on_path:
            start = next(i for i, r in enumerate(path) if r is child)
            return [rule_label(r) for r in path[start:]] + [rule_label(child)]
        if id(child) in done:
            continue
        path.append(child)
        on_path.add(id(child))
        pending.append(iter(child.children()))
    return None


@dataclass(frozen=True)
class CompositeTaxRule(TaxRule):
    """
    Ordered collection of rules charged together.

    Two composites are equal when they hold equal rules in the same order.
    """

    rules: tuple[TaxRule, ...] = ()
    name: str = "composite"

    def __post_init__(self) -> None:
        rules = tuple(self.rules)
        for rule in rules:
            if not isinstance(rule, TaxRule):
                logger.error("composite_invalid_child", extra={
                    "composite": self.name,
                    "child_type": type(rule).__name__,
                })
                raise ConfigurationError(
                    f"Composite {self.name!r} child must be a TaxRule, "
                    f"got {type(rule).__name__}"
                )
        object.__setattr__(self, "rules", rules)

        cycle = find_cycle(self)
        if cycle is not None:
            logger.error("composite_cycle_detected", extra={
                "composite": self.name,
                "cycle": cycle,
            })
            raise CyclicCompositeError(cycle)

        seen: set[int] = set()
        duplicates = []
        for rule in rules:
            if id(rule) in seen:
                duplicates.append(rule_label(rule))
            seen.add(id(rule))
        if duplicates:
            logger.warning("composite_duplicate_rule", extra={
                "composite": self.name,
                "duplicates": duplicates,
            })

    @classmethod
    def of(cls, *rules: TaxRule, name: str = "composite") -> CompositeTaxRule:
        """Build from positional rules."""
        return cls(rules=rules, name=name)

    def children(self) -> tuple[TaxRule, ...]:
        return self.rules

    def compute_tax(self, value: Money) -> Money:
        return Money.sum_of(rule.compute_tax(value) for rule in self.rules)

    def flatten(self) -> tuple[TaxRule, ...]:
        """Leaf rules in charge order, nested composites expanded."""
        leaves: list[TaxRule] = []
        pending: list[Iterator[TaxRule]] = [iter(self.rules)]
        while pending:
            rule = next(pending[-1], _EXHAUSTED)
            if rule is _EXHAUSTED:
                pending.pop()
            elif isinstance(rule, CompositeTaxRule):
                pending.append(iter(rule.rules))
            else:
                leaves.append(rule)
        return tuple(leaves)

