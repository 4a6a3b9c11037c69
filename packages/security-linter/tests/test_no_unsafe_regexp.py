import pytest
from security_linter.errors import ConfigurationError
from security_linter.models import Severity
from security_linter.rules import NEW_REGEXP_PATTERN, NoUnsafeRegExpRule, RuleContext


def new_expression(callee_name, args):
    return {
        "type": "NewExpression",
        "callee": {"type": "Identifier", "name": callee_name},
        "arguments": args,
    }


def run_rule(node):
    rule = NoUnsafeRegExpRule()
    context = RuleContext(rule, rule.validate_options({}))
    listeners = rule.create(context)
    listeners[node["type"]](node)
    return context.diagnostics


def test_literal_argument_is_allowed():
    args = [{"type": "Literal", "value": "ab"}]
    captures = {}
    assert NEW_REGEXP_PATTERN.match(new_expression("RegExp", args), captures) is True
    assert captures["constructor_args"] == [{"type": "Literal", "value": "ab"}]

    assert run_rule(new_expression("RegExp", args)) == []


def test_identifier_argument_is_reported():
    node = new_expression("RegExp", [{"type": "Identifier", "name": "userInput"}])
    diagnostics = run_rule(node)

    assert len(diagnostics) == 1
    assert diagnostics[0].node is node
    assert diagnostics[0].message_id == "error-unsafe-regexp"
    assert diagnostics[0].message.startswith("Regular expressions should be constructed from string constants.")


def test_other_constructor_is_ignored():
    node = new_expression("NotRegExp", [{"type": "Identifier", "name": "userInput"}])
    assert NEW_REGEXP_PATTERN.match(node, {}) is False
    assert run_rule(node) == []


def test_no_arguments_is_allowed():
    node = new_expression("RegExp", [])
    captures = {}
    assert NEW_REGEXP_PATTERN.match(node, captures) is True
    assert captures["constructor_args"] == []
    assert run_rule(node) == []


def test_non_string_literal_is_accepted():
    node = new_expression("RegExp", [{"type": "Literal", "value": 5, "raw": "5"}])
    assert run_rule(node) == []


def test_only_first_argument_is_checked():
    node = new_expression("RegExp", [{"type": "Literal", "value": "a"}, {"type": "Identifier", "name": "flags"}])
    assert run_rule(node) == []


def test_member_callee_is_ignored():
    node = {
        "type": "NewExpression",
        "callee": {"type": "MemberExpression", "object": {"type": "Identifier", "name": "window"}},
        "arguments": [{"type": "Identifier", "name": "userInput"}],
    }
    assert run_rule(node) == []


def test_rule_metadata():
    rule = NoUnsafeRegExpRule()
    assert rule.name == "no-unsafe-regexp"
    assert rule.rule_id == "S001"
    assert rule.severity is Severity.WARNING
    assert rule.rule_type == "problem"
    assert rule.category == "Best Practices"
    assert "string constants" in rule.description
    assert set(rule.messages) == {"error-unsafe-regexp"}


def test_options_reject_unknown_properties():
    rule = NoUnsafeRegExpRule()
    rule.validate_options({})
    with pytest.raises(ConfigurationError, match="no-unsafe-regexp"):
        rule.validate_options({"allowIdentifiers": True})
    with pytest.raises(ConfigurationError):
        rule.validate_options(["not", "a", "table"])


def test_report_rejects_unknown_message_id():
    rule = NoUnsafeRegExpRule()
    context = RuleContext(rule, rule.validate_options({}))
    with pytest.raises(ValueError):
        context.report(new_expression("RegExp", []), "no-such-message")
