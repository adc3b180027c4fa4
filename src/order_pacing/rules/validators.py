"""Rule field validators.

Each validator receives a rule as a plain mapping with snake_case keys and
raises ``ConfigurationError`` naming the offending field.
"""

from typing import Any, Callable, Dict, List

from pydantic.alias_generators import to_camel

from order_pacing.config.constants import MAX_WEEK_DAY, MIN_WEEK_DAY
from order_pacing.core.errors import ConfigurationError
from order_pacing.core.timeutils import is_time_string, time_string_to_minutes
from order_pacing.models.rule import Rule

RuleValidator = Callable[[Dict[str, Any]], None]

THRESHOLD_FIELDS = ("max_orders", "max_items", "max_amount_cents")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _require_positive(rule: Dict[str, Any], field: str, unit: str = "") -> None:
    value = rule.get(field)
    if not _is_number(value) or value <= 0:
        raise ConfigurationError(
            f"{field} must be a positive number greater than 0{unit}", field=field
        )


def _check_optional_positive(rule: Dict[str, Any], field: str) -> None:
    if rule.get(field) is None:
        return
    _require_positive(rule, field)


def _check_time_string(rule: Dict[str, Any], field: str) -> None:
    value = rule.get(field)
    if value is None:
        return

    if not isinstance(value, str):
        raise ConfigurationError(f"{field} must be a string in HH:MM or HH:MM:SS format", field=field)

    if not is_time_string(value):
        raise ConfigurationError(
            f'{field} must be in HH:MM or HH:MM:SS format (e.g., "09:30", "23:45:00"), got: "{value}"',
            field=field,
        )


def normalize_rule_fields(raw: Any) -> Dict[str, Any]:
    """Map camelCase keys onto the snake_case field names.

    Unknown keys are kept so validators and the model see them as given.
    """
    if isinstance(raw, Rule):
        return raw.model_dump()

    if not isinstance(raw, dict):
        raise ConfigurationError("Rule must be a mapping of rule fields", field="rule")

    camel_to_snake = {to_camel(name): name for name in Rule.model_fields}
    return {camel_to_snake.get(key, key): value for key, value in raw.items()}


def validate_rule_id(rule: Dict[str, Any]) -> None:
    rule_id = rule.get("rule_id")
    if rule_id is None:
        return
    if not isinstance(rule_id, str) or not rule_id.strip():
        raise ConfigurationError("rule_id must be a non-empty string", field="rule_id")


def validate_time_frame_minutes(rule: Dict[str, Any]) -> None:
    _require_positive(rule, "time_frame_minutes", " (in minutes)")


def validate_busy_time_minutes(rule: Dict[str, Any]) -> None:
    _require_positive(rule, "busy_time_minutes", " (in minutes)")


def validate_category_ids(rule: Dict[str, Any]) -> None:
    category_ids = rule.get("category_ids", [])
    if not isinstance(category_ids, list):
        raise ConfigurationError("category_ids must be an array", field="category_ids")
    if not all(isinstance(category_id, str) for category_id in category_ids):
        raise ConfigurationError("category_ids must contain strings", field="category_ids")


def validate_week_days(rule: Dict[str, Any]) -> None:
    week_days = rule.get("week_days", [])
    if not isinstance(week_days, list):
        raise ConfigurationError("week_days must be an array", field="week_days")

    for day in week_days:
        if not isinstance(day, int) or isinstance(day, bool) or not MIN_WEEK_DAY <= day <= MAX_WEEK_DAY:
            raise ConfigurationError(
                f"week_days must contain numbers between {MIN_WEEK_DAY} (Sunday) "
                f"and {MAX_WEEK_DAY} (Saturday)",
                field="week_days",
            )


def validate_start_time(rule: Dict[str, Any]) -> None:
    _check_time_string(rule, "start_time")


def validate_end_time(rule: Dict[str, Any]) -> None:
    _check_time_string(rule, "end_time")


def validate_time_range(rule: Dict[str, Any]) -> None:
    start_time = rule.get("start_time")
    end_time = rule.get("end_time")
    if start_time is None or end_time is None:
        return

    if time_string_to_minutes(start_time) >= time_string_to_minutes(end_time):
        raise ConfigurationError("start_time must be less than end_time", field="start_time")


def validate_max_orders(rule: Dict[str, Any]) -> None:
    _check_optional_positive(rule, "max_orders")
    max_orders = rule.get("max_orders")
    if max_orders is not None and not isinstance(max_orders, int):
        raise ConfigurationError("max_orders must be a whole number", field="max_orders")


def validate_max_items(rule: Dict[str, Any]) -> None:
    _check_optional_positive(rule, "max_items")
    max_items = rule.get("max_items")
    if max_items is not None and not isinstance(max_items, int):
        raise ConfigurationError("max_items must be a whole number", field="max_items")


def validate_max_amount_cents(rule: Dict[str, Any]) -> None:
    _check_optional_positive(rule, "max_amount_cents")


def validate_at_least_one_threshold(rule: Dict[str, Any]) -> None:
    if all(rule.get(field) is None for field in THRESHOLD_FIELDS):
        raise ConfigurationError(
            "At least one threshold must be set (max_orders, max_items, or max_amount_cents)",
            field="thresholds",
        )


# Order matters: format checks run before the range check that parses times.
DEFAULT_VALIDATORS: List[RuleValidator] = [
    validate_rule_id,
    validate_time_frame_minutes,
    validate_busy_time_minutes,
    validate_category_ids,
    validate_week_days,
    validate_start_time,
    validate_end_time,
    validate_time_range,
    validate_max_orders,
    validate_max_items,
    validate_max_amount_cents,
    validate_at_least_one_threshold,
]
