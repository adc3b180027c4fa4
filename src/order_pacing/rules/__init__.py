"""Rule validation and rule sets."""

from order_pacing.rules.loader import load_rules_file
from order_pacing.rules.ruleset import RuleSet
from order_pacing.rules.validators import DEFAULT_VALIDATORS

__all__ = ["DEFAULT_VALIDATORS", "RuleSet", "load_rules_file"]
