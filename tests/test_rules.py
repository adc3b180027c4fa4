"""
Unit tests for rule validation, rule sets and rule loading.
"""
import json

import pytest

from order_pacing.core.errors import ConfigurationError
from order_pacing.models.rule import Rule
from order_pacing.rules.loader import load_rules_file
from order_pacing.rules.ruleset import RuleSet


def _rule(**overrides) -> dict:
    rule = {"timeFrameMinutes": 15, "busyTimeMinutes": 10, "maxOrders": 5}
    rule.update(overrides)
    return {k: v for k, v in rule.items() if v is not None}


class TestRuleSetConstruction:
    def test_accepts_camel_case_rule(self):
        rule_set = RuleSet([_rule(ruleId="r1", categoryIds=["pizza"], weekDays=[0, 6])])

        rule = rule_set.rules[0]
        assert rule.rule_id == "r1"
        assert rule.time_frame_minutes == 15
        assert rule.category_ids == ["pizza"]
        assert rule.week_days == [0, 6]

    def test_accepts_snake_case_and_model_instances(self):
        rule = Rule(time_frame_minutes=5, busy_time_minutes=5, max_items=3)
        rule_set = RuleSet([rule, {"time_frame_minutes": 1, "busy_time_minutes": 1, "max_amount_cents": 100}])

        assert len(rule_set) == 2
        assert rule_set.rules[0] == rule

    def test_defaults_for_scoping_fields(self):
        rule = RuleSet([_rule()]).rules[0]
        assert rule.category_ids == []
        assert rule.week_days == []
        assert rule.start_time is None and rule.end_time is None

    def test_empty_rules_rejected_by_default(self):
        with pytest.raises(ConfigurationError) as exc:
            RuleSet([])
        assert exc.value.field == "rules"

    def test_empty_rules_tolerated_when_allowed(self):
        rule_set = RuleSet([], allow_empty=True)
        assert not rule_set.has_rules()
        assert list(rule_set) == []

    def test_non_list_rules_rejected(self):
        with pytest.raises(ConfigurationError):
            RuleSet("not-a-list")
        with pytest.raises(ConfigurationError):
            RuleSet(_rule())

    def test_accepts_generator_of_rules(self):
        rule_set = RuleSet(_rule(ruleId=f"r{i}") for i in range(3))
        assert [rule.rule_id for rule in rule_set] == ["r0", "r1", "r2"]

    def test_null_rule_rejected(self):
        with pytest.raises(ConfigurationError) as exc:
            RuleSet([None])
        assert exc.value.field == "rule"

    def test_rules_are_immutable(self):
        rule_set = RuleSet([_rule()])
        assert isinstance(rule_set.rules, tuple)
        with pytest.raises(Exception):
            rule_set.rules[0].max_orders = 99


class TestRuleValidation:
    @pytest.mark.parametrize(
        "overrides, field",
        [
            ({"timeFrameMinutes": 0}, "time_frame_minutes"),
            ({"timeFrameMinutes": -5}, "time_frame_minutes"),
            ({"timeFrameMinutes": None}, "time_frame_minutes"),
            ({"busyTimeMinutes": 0}, "busy_time_minutes"),
            ({"maxOrders": 0}, "max_orders"),
            ({"maxOrders": 2.5}, "max_orders"),
            ({"maxItems": -1}, "max_items"),
            ({"maxAmountCents": 0}, "max_amount_cents"),
            ({"categoryIds": "pizza"}, "category_ids"),
            ({"weekDays": "monday"}, "week_days"),
            ({"weekDays": [7]}, "week_days"),
            ({"weekDays": [-1]}, "week_days"),
            ({"startTime": "9am"}, "start_time"),
            ({"endTime": "25:00"}, "end_time"),
            ({"startTime": 900}, "start_time"),
            ({"ruleId": "  "}, "rule_id"),
        ],
    )
    def test_invalid_field_names_the_field(self, overrides, field):
        with pytest.raises(ConfigurationError) as exc:
            RuleSet([_rule(**overrides)])
        assert exc.value.field == field

    def test_no_threshold_rejected(self):
        with pytest.raises(ConfigurationError) as exc:
            RuleSet([{"timeFrameMinutes": 15, "busyTimeMinutes": 10}])
        assert "At least one threshold" in str(exc.value)

    def test_start_must_precede_end(self):
        with pytest.raises(ConfigurationError) as exc:
            RuleSet([_rule(startTime="14:00", endTime="14:00")])
        assert exc.value.field == "start_time"

    def test_time_strings_with_seconds_accepted(self):
        rule = RuleSet([_rule(startTime="09:30:00", endTime="17:45")]).rules[0]
        assert rule.start_minutes == 9 * 60 + 30
        assert rule.end_minutes == 17 * 60 + 45

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            RuleSet([_rule(maxOrders=-3)])

    def test_each_threshold_alone_is_enough(self):
        for threshold in ({"maxOrders": 1}, {"maxItems": 1}, {"maxAmountCents": 1.5}):
            rule = {"timeFrameMinutes": 15, "busyTimeMinutes": 10, **threshold}
            assert len(RuleSet([rule])) == 1


class TestLoadRulesFile:
    def test_loads_json_array(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text(json.dumps([_rule(ruleId="a"), _rule(ruleId="b")]))

        rules = load_rules_file(path)

        assert [rule["ruleId"] for rule in rules] == ["a", "b"]
        assert len(RuleSet(rules)) == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc:
            load_rules_file(tmp_path / "missing.json")
        assert exc.value.field == "rules_file"

    def test_not_an_array(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text(json.dumps({"timeFrameMinutes": 5}))
        with pytest.raises(ConfigurationError):
            load_rules_file(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "rules.json"
        path.write_text("[{")
        with pytest.raises(ConfigurationError):
            load_rules_file(path)
