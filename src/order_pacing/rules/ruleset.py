"""Immutable collection of validated rules."""

from typing import Any, Iterable, Iterator, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from order_pacing.core.errors import ConfigurationError
from order_pacing.core.logger import setup_logger
from order_pacing.models.rule import Rule
from order_pacing.rules.validators import DEFAULT_VALIDATORS, RuleValidator, normalize_rule_fields

logger = setup_logger(__name__)


class RuleSet:
    """Ordered, validated, read-only list of rules.

    Rules are validated eagerly: any invalid rule raises
    ``ConfigurationError`` and no RuleSet is produced. To change rules,
    build a new RuleSet and swap it in whole.
    """

    def __init__(
        self,
        rules: Optional[Iterable[Any]] = None,
        validators: Optional[List[RuleValidator]] = None,
        allow_empty: bool = False,
    ):
        """Validate and freeze the given rules.

        Args:
            rules: Rule instances or mappings (camelCase or snake_case keys)
            validators: Validator chain (defaults to DEFAULT_VALIDATORS)
            allow_empty: Accept an empty rule list instead of rejecting it
        """
        self._validators = list(validators if validators is not None else DEFAULT_VALIDATORS)

        if rules is not None and (isinstance(rules, (str, bytes, Mapping)) or not isinstance(rules, Iterable)):
            raise ConfigurationError("Rules must be provided as an array", field="rules")

        raw_rules = list(rules or [])
        if not raw_rules and not allow_empty:
            raise ConfigurationError("At least one busy time rule must be provided", field="rules")

        self._rules: Tuple[Rule, ...] = tuple(self._build(raw) for raw in raw_rules)

        if not self._rules:
            logger.warning("Rule set is empty, orders will be stored without evaluation")

    def _build(self, raw: Any) -> Rule:
        if raw is None:
            raise ConfigurationError("Rule cannot be null", field="rule")

        fields = normalize_rule_fields(raw)
        for validator in self._validators:
            validator(fields)

        try:
            return Rule.model_validate(fields)
        except ValidationError as e:
            # Only reachable for fields the validator chain does not cover
            field = ".".join(str(part) for part in e.errors()[0]["loc"])
            raise ConfigurationError(f"Invalid rule field {field}: {e}", field=field) from e

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return self._rules

    def has_rules(self) -> bool:
        return len(self._rules) > 0

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleSet({len(self._rules)} rules)"
