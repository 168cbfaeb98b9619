# yaml_parser.py
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)


def normalize_keys_recursive(data: Any) -> Any:
    """
    Recursively lowercases dictionary keys and replaces spaces with underscores.
    Lets hand-written story files use headings like "Social Rules" while the
    snapshot models expect "social_rules".
    """
    if isinstance(data, dict):
        new_dict = {}
        for key, value in data.items():
            normalized_key = str(key).lower().replace(" ", "_")
            new_dict[normalized_key] = normalize_keys_recursive(value)
        return new_dict
    elif isinstance(data, list):
        return [normalize_keys_recursive(item) for item in data]
    else:
        return data


def load_yaml_file(filepath: str, normalize_keys: bool = True) -> dict[str, Any] | None:
    """
    Loads and parses a YAML story file.

    Args:
        filepath: Path to the YAML file.
        normalize_keys: Whether to recursively normalize dictionary keys
                        (lowercase, spaces to underscores). Defaults to True.

    Returns:
        A dictionary with the YAML content, ``{}`` for an empty file, or None
        if the file is missing, malformed or not a mapping at the root.
    """
    if not filepath.endswith((".yaml", ".yml")):
        logger.error("File specified is not a YAML file", path=filepath)
        return None
    try:
        with open(filepath, encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except FileNotFoundError:
        logger.warning("YAML file not found", path=filepath)
        return None
    except yaml.YAMLError as e:
        logger.error("Error parsing YAML file", path=filepath, error=str(e))
        return None

    if content is None:
        return {}
    if not isinstance(content, dict):
        logger.error(
            "YAML file must have a mapping as its root element",
            path=filepath,
            parsed_type=type(content).__name__,
        )
        return None

    if normalize_keys:
        return normalize_keys_recursive(content)
    return content
