"""Rule registry for managing lint rules."""

from skillshelf.core.rules.base import LintRule


class RuleRegistry:
    """Registry for lint rules, in the order they run."""

    def __init__(self) -> None:
        self._rules: dict[str, LintRule] = {}

    def register(self, rule: LintRule) -> None:
        """Register a rule, replacing any rule with the same id."""
        self._rules[rule.id] = rule

    def get(self, rule_id: str) -> LintRule | None:
        """Get a rule by id."""
        return self._rules.get(rule_id)

    def list_all(self) -> list[LintRule]:
        """List all registered rules."""
        return list(self._rules.values())

    def ids(self) -> list[str]:
        return list(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    @classmethod
    def with_builtins(cls) -> "RuleRegistry":
        """Create registry with built-in rules registered."""
        from skillshelf.core.rules.builtin_rules import BUILTIN_RULES

        registry = cls()
        for rule_cls in BUILTIN_RULES:
            registry.register(rule_cls())
        return registry
