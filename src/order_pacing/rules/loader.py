"""Load rule definitions from a JSON file."""

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from order_pacing.core.errors import ConfigurationError
from order_pacing.core.logger import setup_logger

logger = setup_logger(__name__)


def load_rules_file(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Read a JSON array of rule objects.

    The returned mappings are not validated here; pass them to ``RuleSet``.

    Args:
        path: Path to the JSON file

    Returns:
        List of raw rule mappings
    """
    rules_path = Path(path)

    if not rules_path.exists():
        raise ConfigurationError(f"Rules file not found: {rules_path}", field="rules_file")

    try:
        with open(rules_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Rules file is not valid JSON: {e}", field="rules_file") from e

    if not isinstance(data, list):
        raise ConfigurationError("Rules file must contain a JSON array", field="rules_file")

    logger.info(f"Loaded {len(data)} rules from {rules_path}")
    return data
