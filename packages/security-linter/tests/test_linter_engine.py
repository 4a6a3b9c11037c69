import logging

import pytest
from security_linter.engine import LinterEngine
from security_linter.errors import ConfigurationError, SourceError
from security_linter.models import RuleSettings, Severity
from security_linter.registry import RuleRegistry
from security_linter.rules.no_unsafe_regexp import NoUnsafeRegExpRule


def test_linter_dynamic_regexp(tmp_path):
    code = "const pattern = getPattern();\nconst re = new RegExp(pattern);\n"
    file_path = tmp_path / "test.js"
    file_path.write_text(code)

    issues = LinterEngine().analyze_file(file_path)

    assert len(issues) == 1
    assert issues[0].rule_id == "no-unsafe-regexp"
    assert issues[0].message_id == "error-unsafe-regexp"
    assert issues[0].severity is Severity.WARNING
    assert issues[0].line == 2
    assert issues[0].column == 11
    assert issues[0].context == "new RegExp(pattern)"
    assert issues[0].file_path == file_path


@pytest.mark.parametrize(
    "code",
    [
        "new RegExp('hello');",
        "new RegExp(\"a+\", 'g');",
        "new RegExp();",
        "new RegExp;",
        "new Foo(userInput);",
        "RegExp(userInput);",
        "new window.RegExp(userInput);",
        "new RegExp(5);",
    ],
)
def test_linter_no_issue(code):
    assert LinterEngine().analyze_source(code) == []


@pytest.mark.parametrize(
    "code",
    [
        "new RegExp(userInput);",
        "new RegExp('^' + prefix);",
        "new RegExp(`${a}b`);",
        "new RegExp(...parts);",
        "new RegExp([]);",
    ],
)
def test_linter_reports(code):
    issues = LinterEngine().analyze_source(code)
    assert [i.rule_id for i in issues] == ["no-unsafe-regexp"]


def test_linter_finds_nested_and_sorts_by_position():
    code = "function f(a, b) {\n  return [new RegExp(b), new RegExp(a)];\n}\nnew RegExp(x);\n"
    issues = LinterEngine().analyze_source(code)
    assert [(i.line, i.context) for i in issues] == [
        (2, "new RegExp(b)"),
        (2, "new RegExp(a)"),
        (4, "new RegExp(x)"),
    ]


def test_severity_override():
    engine = LinterEngine(rule_settings={"no-unsafe-regexp": RuleSettings(severity=Severity.ERROR)})
    issues = engine.analyze_source("new RegExp(x);")
    assert issues[0].severity is Severity.ERROR


def test_settings_by_rule_code():
    engine = LinterEngine(rule_settings={"S001": RuleSettings(severity=Severity.INFO)})
    assert engine.analyze_source("new RegExp(x);")[0].severity is Severity.INFO


def test_invalid_options_fail_before_linting():
    with pytest.raises(ConfigurationError):
        LinterEngine(rule_settings={"no-unsafe-regexp": RuleSettings(options={"unexpected": 1})})


def test_settings_for_unknown_rule():
    with pytest.raises(ConfigurationError, match="no-such-rule"):
        LinterEngine(rule_settings={"no-such-rule": RuleSettings()})


def test_no_rules_no_issues():
    assert LinterEngine(rules=[]).analyze_source("new RegExp(x);") == []


def test_parse_errors_are_logged_and_linting_continues(caplog):
    with caplog.at_level(logging.WARNING, logger="security_linter.engine"):
        issues = LinterEngine().analyze_source("new RegExp(x);\n}}\n")

    assert any("syntax error" in r.getMessage() or "missing" in r.getMessage() for r in caplog.records)
    assert [i.line for i in issues] == [1]


def test_missing_file(tmp_path):
    with pytest.raises(SourceError):
        LinterEngine().analyze_file(tmp_path / "missing.js")


def test_registry_selection():
    registry = RuleRegistry()
    assert [r.name for r in registry.get_enabled_rules(select=["S"])] == ["no-unsafe-regexp"]
    assert registry.get_enabled_rules(select=["S"], ignore=["no-unsafe-regexp"]) == []
    assert registry.get_rule("S001") is registry.get_rule("no-unsafe-regexp")

    with pytest.raises(ConfigurationError):
        registry.get_enabled_rules(select=["X"])


def test_registry_rejects_duplicates():
    registry = RuleRegistry()
    with pytest.raises(ValueError):
        registry.register(NoUnsafeRegExpRule())


def test_deeply_nested_parentheses():
    code = "x = " + "(" * 3000 + "1" + ")" * 3000 + ";\nnew RegExp(y);\n"
    issues = LinterEngine().analyze_source(code)
    assert [(i.line, i.context) for i in issues] == [(2, "new RegExp(y)")]


def test_deeply_nested_arrays():
    code = "x = " + "[" * 1500 + "new RegExp(y)" + "]" * 1500 + ";\n"
    issues = LinterEngine().analyze_source(code)
    assert [(i.line, i.column) for i in issues] == [(1, 1504)]


def test_column_counts_characters():
    issues = LinterEngine().analyze_source("s = 'é'; new RegExp(y);")
    assert issues[0].column == 9
