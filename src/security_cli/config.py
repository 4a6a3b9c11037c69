import tomllib
from pathlib import Path
from typing import Any

from security_linter.errors import ConfigurationError
from security_linter.models import RuleSettings, Severity

DEFAULT_EXTENSIONS = [".js", ".mjs", ".cjs", ".jsx"]
CONFIG_FILE_NAMES = [".security-lint.toml", "pyproject.toml"]


def find_config(directory: Path) -> Path | None:
    """First config file present in directory: .security-lint.toml, then pyproject.toml"""
    for name in CONFIG_FILE_NAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


class LintConfig:
    """Handles loading and validation of .security-lint.toml configuration"""

    def __init__(self, config_path: Path | None = None):
        self.select: list[str] = ["S"]
        self.ignore: list[str] = []
        self.extensions: list[str] = list(DEFAULT_EXTENSIONS)
        self.rule_settings: dict[str, RuleSettings] = {}

        if config_path and config_path.exists():
            self._load_from_file(config_path)

    def _load_from_file(self, path: Path):
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

        lint_data = data.get("tool", {}).get("security-lint", {})
        self.select = self._string_list(lint_data, "select", self.select)
        self.ignore = self._string_list(lint_data, "ignore", self.ignore)
        self.extensions = self._string_list(lint_data, "extensions", self.extensions)

        rules = lint_data.get("rules", {})
        if not isinstance(rules, dict):
            raise ConfigurationError("[tool.security-lint.rules] must be a table")
        for name, table in rules.items():
            self.rule_settings[name] = self._rule_settings(name, table)

    @staticmethod
    def _string_list(data: dict[str, Any], key: str, default: list[str]) -> list[str]:
        value = data.get(key, default)
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigurationError(f"'{key}' must be a list of strings")
        return value

    @staticmethod
    def _rule_settings(name: str, table: Any) -> RuleSettings:
        if not isinstance(table, dict):
            raise ConfigurationError(f"Settings for rule '{name}' must be a table")

        unknown = set(table) - {"severity", "options"}
        if unknown:
            raise ConfigurationError(f"Unknown settings for rule '{name}': {', '.join(sorted(unknown))}")

        severity = None
        if "severity" in table:
            try:
                severity = Severity(str(table["severity"]).lower())
            except ValueError as e:
                raise ConfigurationError(f"Invalid severity for rule '{name}': {table['severity']!r}") from e

        return RuleSettings(severity=severity, options=table.get("options", {}))

    def apply_to_registry(self, registry: Any) -> list[Any]:
        """Return list of enabled rules based on this config"""
        return registry.get_enabled_rules(select=self.select, ignore=self.ignore)

    def settings_for(self, registry: Any, rules: list[Any]) -> dict[str, RuleSettings]:
        """Settings restricted to the enabled rules"""
        for name in self.rule_settings:
            if registry.get_rule(name) is None:
                raise ConfigurationError(f"Settings given for unknown rule '{name}'")

        keys = {r.name for r in rules} | {r.rule_id for r in rules}
        return {name: s for name, s in self.rule_settings.items() if name in keys}
