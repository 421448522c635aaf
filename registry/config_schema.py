"""Configuration schema and defaults for the student registry."""

from typing import Any
from pathlib import Path
import copy
import json

DEFAULT_CONFIG: dict[str, Any] = {
    "storage": {
        "path": "student_storage.json",
        "key": "students",
        "quota_bytes": 5 * 1024 * 1024
    },
    "form": {
        "courses": [
            "Computer Science",
            "Information Technology",
            "Electronics",
            "Mechanical",
            "Civil"
        ],
        "years": ["1st Year", "2nd Year", "3rd Year", "4th Year"]
    },
    "messages": {
        "ttl_seconds": 3.0
    },
    "export": {
        "date_format": None,
        "csv_filename": "students.csv",
        "json_filename": "students.json",
        "xlsx_filename": "students.xlsx"
    },
    "logging": {
        "level": "INFO",
        "file": None,
        "rotation": "10 MB",
        "retention": "7 days"
    }
}


def get_default_config() -> dict[str, Any]:
    """Return a deep copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def merge_config(user_config: dict[str, Any]) -> dict[str, Any]:
    """
    Merge user configuration with defaults.

    Each section is updated key by key; unknown sections are ignored.
    """
    result = get_default_config()

    for section in ("storage", "messages", "export", "logging"):
        if section in user_config:
            result[section].update(user_config[section])

    # Option lists replace the defaults wholesale
    form = user_config.get("form", {})
    if "courses" in form:
        result["form"]["courses"] = list(form["courses"])
    if "years" in form:
        result["form"]["years"] = list(form["years"])

    return result


def load_config(config_path: str | Path = "config.json") -> dict[str, Any]:
    """Load configuration from a JSON file, falling back to defaults if it is absent."""
    path = Path(config_path)
    if not path.exists():
        return get_default_config()
    with open(path, "r", encoding="utf-8") as f:
        return merge_config(json.load(f))


def validate_config(config: dict[str, Any]) -> list[dict[str, str]]:
    """
    Validate configuration and return list of issues.

    Returns:
        List of dicts with 'type' (error/warning) and 'message'.
    """
    issues = []

    if not config.get("storage", {}).get("key"):
        issues.append({
            "type": "error",
            "message": "Storage key must not be empty"
        })

    quota = config.get("storage", {}).get("quota_bytes")
    if quota is not None and quota <= 0:
        issues.append({
            "type": "error",
            "message": f"Storage quota must be positive (got {quota})"
        })

    if not config.get("form", {}).get("courses"):
        issues.append({
            "type": "warning",
            "message": "No courses defined; the course dropdown will be empty"
        })

    if not config.get("form", {}).get("years"):
        issues.append({
            "type": "warning",
            "message": "No years defined; the year dropdown will be empty"
        })

    ttl = config.get("messages", {}).get("ttl_seconds", 0)
    if ttl <= 0:
        issues.append({
            "type": "error",
            "message": f"Message display time must be positive (got {ttl})"
        })

    return issues
