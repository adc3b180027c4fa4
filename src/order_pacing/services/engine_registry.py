"""Per-bucket engine registry."""

from typing import Any, Dict, Iterable, List, Optional, Union

from order_pacing.config.constants import DEFAULT_TIMEZONE
from order_pacing.core.logger import setup_logger
from order_pacing.engine.pacing import PacingEngine
from order_pacing.models.busy_time import TimeframeMode
from order_pacing.rules.ruleset import RuleSet
from order_pacing.storage.base import TimeSeriesStore

logger = setup_logger(__name__)


class EngineRegistry:
    """Hands out PacingEngines per bucket.

    All engines share one store. Only buckets whose rules were replaced with
    ``set_rules`` keep a cached engine; every other bucket gets a fresh
    engine over the shared default rules, so the registry does not grow with
    the number of buckets queried.
    """

    def __init__(
        self,
        store: TimeSeriesStore,
        default_rules: Optional[Iterable[Any]] = None,
        timeframe_mode: Union[str, TimeframeMode] = TimeframeMode.BEFORE_ONLY,
        timezone: str = DEFAULT_TIMEZONE,
        allow_empty_rules: bool = False,
        key_prefix: str = "",
    ):
        """Initialize registry.

        The default rules are validated immediately, so a bad rules file
        fails startup rather than the first request.
        """
        self.store = store
        self.timeframe_mode = timeframe_mode
        self.timezone = timezone
        self.allow_empty_rules = allow_empty_rules
        self.key_prefix = key_prefix
        self.default_rules = RuleSet(default_rules, allow_empty=allow_empty_rules)
        self._engines: Dict[str, PacingEngine] = {}

        logger.info(f"Engine registry initialized with {len(self.default_rules)} default rules")

    def _create_engine(self, bucket: str, rules: RuleSet) -> PacingEngine:
        return PacingEngine(
            store=self.store,
            bucket=bucket,
            rules=rules,
            timeframe_mode=self.timeframe_mode,
            timezone=self.timezone,
            allow_empty_rules=self.allow_empty_rules,
            key_prefix=self.key_prefix,
        )

    def get_engine(self, bucket: str) -> PacingEngine:
        """Get the engine for a bucket.

        Returns:
            The cached engine if the bucket has custom rules, otherwise a
            new engine over the default rules that is not retained
        """
        engine = self._engines.get(bucket)
        if engine is None:
            engine = self._create_engine(bucket, self.default_rules)
        return engine

    def set_rules(self, bucket: str, rules: Iterable[Any]) -> RuleSet:
        """Replace a bucket's rules, caching its engine from now on."""
        rule_set = RuleSet(rules, allow_empty=self.allow_empty_rules)

        engine = self._engines.get(bucket)
        if engine is None:
            self._engines[bucket] = self._create_engine(bucket, rule_set)
            logger.info(f"Custom rules set for bucket {bucket}: rules={len(rule_set)}", extra={"bucket": bucket})
            return rule_set

        return engine.set_rules(rule_set)

    def buckets(self) -> List[str]:
        """Buckets with custom rules."""
        return sorted(self._engines)
