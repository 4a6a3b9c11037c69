import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from js_tree_sitter import ASTWalker, JSParser, to_estree

from .errors import ConfigurationError, SourceError
from .models import InternalIssue, RuleSettings
from .registry import RuleRegistry
from .rules.base import BaseRule, Listener, RuleContext

logger = logging.getLogger(__name__)


class LinterEngine:
    """Core engine for linting JavaScript sources"""

    def __init__(
        self,
        rules: Optional[Sequence[BaseRule]] = None,
        rule_settings: Optional[Mapping[str, RuleSettings]] = None,
    ):
        self.parser = JSParser()
        self.rules = list(rules) if rules is not None else RuleRegistry().get_all_rules()
        self.rule_settings = dict(rule_settings or {})
        self.issues: List[InternalIssue] = []

        known = {rule.name for rule in self.rules} | {rule.rule_id for rule in self.rules}
        for key in self.rule_settings:
            if key not in known:
                raise ConfigurationError(f"Settings given for unknown or disabled rule '{key}'")

        # Options are validated once, before any file is read.
        self._options = {rule.name: rule.validate_options(self._settings_for(rule).options) for rule in self.rules}

    def analyze_file(self, file_path: Path) -> List[InternalIssue]:
        """Run all lint checks on a file"""
        try:
            source = Path(file_path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceError(f"Cannot read {file_path}: {e}") from e
        return self.analyze_source(source, Path(file_path))

    def analyze_source(self, source: str, file_path: Path = Path("<input>")) -> List[InternalIssue]:
        """Run all lint checks on source text"""
        logger.debug("Linting %s with %d rule(s)", file_path, len(self.rules))

        result = self.parser.parse_string(source)
        for error in result.errors:
            logger.warning("%s:%s", file_path, error)
        program = to_estree(result.tree.root_node, result.source)

        contexts: List[Tuple[BaseRule, RuleContext]] = []
        listeners: Dict[str, List[Listener]] = {}
        for rule in self.rules:
            context = RuleContext(rule, self._options[rule.name])
            contexts.append((rule, context))
            for node_type, listener in rule.create(context).items():
                listeners.setdefault(node_type, []).append(listener)

        def dispatch(node: Dict[str, Any]) -> None:
            for listener in listeners.get(node["type"], ()):
                listener(node)

        ASTWalker.walk(program, dispatch)

        self.issues = []
        for rule, context in contexts:
            severity = self._settings_for(rule).severity or rule.severity
            for diagnostic in context.diagnostics:
                start = diagnostic.node["loc"]["start"]
                self.issues.append(
                    InternalIssue(
                        file_path=file_path,
                        line=start["line"],
                        column=start["column"],
                        rule_id=rule.name,
                        message=diagnostic.message,
                        severity=severity,
                        message_id=diagnostic.message_id,
                        context=ASTWalker.get_text(diagnostic.node, source),
                    )
                )

        logger.debug("%s: %d issue(s)", file_path, len(self.issues))
        return sorted(self.issues, key=lambda x: (x.line, x.column))

    def _settings_for(self, rule: BaseRule) -> RuleSettings:
        return self.rule_settings.get(rule.name) or self.rule_settings.get(rule.rule_id) or RuleSettings()
