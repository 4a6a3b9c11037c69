"""Convert tree-sitter JavaScript syntax trees into ESTree-shaped dicts.

Only the node kinds lint rules inspect get a dedicated ESTree mapping. Every
other named node becomes a generic dict with a CamelCase ``type``, its named
``children`` and, for leaves, the ``raw`` source text. Comments are dropped and
parenthesised expressions are unwrapped, as in ESTree.
"""

import re
from typing import Any, Callable, Dict, List, Optional

from tree_sitter import Node

ESTreeNode = Dict[str, Any]

LOGICAL_OPERATORS = {"&&", "||", "??"}

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}
_ESCAPE_RE = re.compile(r"\\(?:u\{([0-9a-fA-F]+)\}|u([0-9a-fA-F]{4})|x([0-9a-fA-F]{2})|(\r\n|\n)|(.))", re.S)


def camel_case(node_type: str) -> str:
    return "".join(part.capitalize() for part in node_type.split("_"))


def decode_escapes(text: str) -> str:
    """Decode JavaScript string escape sequences."""

    def replace(m: re.Match) -> str:
        code = m.group(1) or m.group(2) or m.group(3)
        if code:
            return chr(int(code, 16))
        if m.group(4):
            return ""
        char = m.group(5)
        return _SIMPLE_ESCAPES.get(char, char)

    return _ESCAPE_RE.sub(replace, text)


def parse_number(raw: str) -> Any:
    text = raw.replace("_", "")
    if text.endswith("n"):
        return int(text[:-1], 0)
    try:
        return int(text, 0)
    except ValueError:
        return float(text)


class ESTreeConverter:
    """Builds ESTree-shaped dicts from one parsed source.

    Handlers build one node at a time and leave child fields holding the
    tree-sitter nodes; ``convert`` then replaces those from a work stack, so
    nesting depth never reaches the interpreter recursion limit.
    """

    def __init__(self, source: str):
        self.source_bytes = source.encode("utf-8")
        self._handlers: Dict[str, Callable[[Node], ESTreeNode]] = {
            "program": self._program,
            "expression_statement": self._expression_statement,
            "identifier": self._identifier,
            "property_identifier": self._identifier,
            "shorthand_property_identifier": self._identifier,
            "string": self._string,
            "number": self._number,
            "true": self._boolean,
            "false": self._boolean,
            "null": self._null,
            "regex": self._regex,
            "template_string": self._template_string,
            "new_expression": self._new_expression,
            "call_expression": self._call_expression,
            "member_expression": self._member_expression,
            "subscript_expression": self._subscript_expression,
            "binary_expression": self._binary_expression,
            "array": self._array,
            "spread_element": self._spread_element,
            "lexical_declaration": self._variable_declaration,
            "variable_declaration": self._variable_declaration,
            "variable_declarator": self._variable_declarator,
        }

    def convert(self, node: Optional[Node]) -> Optional[ESTreeNode]:
        if node is None:
            return None

        root = self._convert_one(node)
        stack = [root]
        while stack:
            current = stack.pop()
            for key, value in list(current.items()):
                if isinstance(value, Node):
                    current[key] = self._convert_one(value)
                    stack.append(current[key])
                elif isinstance(value, list):
                    for i, item in enumerate(value):
                        if isinstance(item, Node):
                            value[i] = self._convert_one(item)
                            stack.append(value[i])
        return root

    def _convert_one(self, node: Node) -> ESTreeNode:
        while node.type == "parenthesized_expression":
            inner = self._named(node)
            if not inner:
                return self._generic(node)
            node = inner[0]
        handler = self._handlers.get(node.type, self._generic)
        return handler(node)

    def text(self, node: Node) -> str:
        return self.source_bytes[node.start_byte : node.end_byte].decode("utf-8")

    def _named(self, node: Node) -> List[Node]:
        return [child for child in node.named_children if child.type != "comment"]

    def _position(self, byte_offset: int, point: Any) -> Dict[str, int]:
        # tree-sitter columns count bytes; ESTree columns count characters.
        line_start = byte_offset - point[1]
        column = len(self.source_bytes[line_start:byte_offset].decode("utf-8", errors="replace"))
        return {"line": point[0] + 1, "column": column}

    def _make(self, node: Node, type_name: str, **fields: Any) -> ESTreeNode:
        result: ESTreeNode = {"type": type_name}
        result.update(fields)
        result["range"] = [node.start_byte, node.end_byte]
        result["loc"] = {
            "start": self._position(node.start_byte, node.start_point),
            "end": self._position(node.end_byte, node.end_point),
        }
        return result

    def _generic(self, node: Node) -> ESTreeNode:
        children = self._named(node)
        fields: Dict[str, Any] = {"children": children}
        if not children:
            fields["raw"] = self.text(node)
        return self._make(node, camel_case(node.type), **fields)

    def _first_named(self, node: Node) -> Optional[Node]:
        inner = self._named(node)
        return inner[0] if inner else None

    def _program(self, node: Node) -> ESTreeNode:
        return self._make(node, "Program", sourceType="script", body=self._named(node))

    def _expression_statement(self, node: Node) -> ESTreeNode:
        return self._make(node, "ExpressionStatement", expression=self._first_named(node))

    def _identifier(self, node: Node) -> ESTreeNode:
        return self._make(node, "Identifier", name=self.text(node))

    def _string(self, node: Node) -> ESTreeNode:
        parts = []
        for child in node.children:
            if child.type == "string_fragment":
                parts.append(self.text(child))
            elif child.type == "escape_sequence":
                parts.append(decode_escapes(self.text(child)))
        return self._make(node, "Literal", value="".join(parts), raw=self.text(node))

    def _number(self, node: Node) -> ESTreeNode:
        raw = self.text(node)
        return self._make(node, "Literal", value=parse_number(raw), raw=raw)

    def _boolean(self, node: Node) -> ESTreeNode:
        return self._make(node, "Literal", value=node.type == "true", raw=self.text(node))

    def _null(self, node: Node) -> ESTreeNode:
        return self._make(node, "Literal", value=None, raw=self.text(node))

    def _regex(self, node: Node) -> ESTreeNode:
        pattern = node.child_by_field_name("pattern")
        flags = node.child_by_field_name("flags")
        regex = {
            "pattern": self.text(pattern) if pattern is not None else "",
            "flags": self.text(flags) if flags is not None else "",
        }
        return self._make(node, "Literal", value=None, raw=self.text(node), regex=regex)

    def _template_string(self, node: Node) -> ESTreeNode:
        expressions = []
        for child in node.named_children:
            if child.type == "template_substitution":
                expressions.extend(self._named(child))
        return self._make(node, "TemplateLiteral", expressions=expressions, raw=self.text(node))

    def _arguments(self, node: Optional[Node]) -> List[Node]:
        if node is None:
            return []
        return self._named(node)

    def _new_expression(self, node: Node) -> ESTreeNode:
        return self._make(
            node,
            "NewExpression",
            callee=node.child_by_field_name("constructor"),
            arguments=self._arguments(node.child_by_field_name("arguments")),
        )

    def _call_expression(self, node: Node) -> ESTreeNode:
        callee = node.child_by_field_name("function")
        arguments = node.child_by_field_name("arguments")
        if arguments is not None and arguments.type == "template_string":
            return self._make(node, "TaggedTemplateExpression", tag=callee, quasi=arguments)
        optional = node.child_by_field_name("optional_chain") is not None
        return self._make(
            node, "CallExpression", callee=callee, arguments=self._arguments(arguments), optional=optional
        )

    def _member_expression(self, node: Node) -> ESTreeNode:
        return self._make(
            node,
            "MemberExpression",
            object=node.child_by_field_name("object"),
            property=node.child_by_field_name("property"),
            computed=False,
        )

    def _subscript_expression(self, node: Node) -> ESTreeNode:
        return self._make(
            node,
            "MemberExpression",
            object=node.child_by_field_name("object"),
            property=node.child_by_field_name("index"),
            computed=True,
        )

    def _binary_expression(self, node: Node) -> ESTreeNode:
        operator_node = node.child_by_field_name("operator")
        operator = self.text(operator_node) if operator_node is not None else ""
        kind = "LogicalExpression" if operator in LOGICAL_OPERATORS else "BinaryExpression"
        return self._make(
            node,
            kind,
            operator=operator,
            left=node.child_by_field_name("left"),
            right=node.child_by_field_name("right"),
        )

    def _array(self, node: Node) -> ESTreeNode:
        return self._make(node, "ArrayExpression", elements=self._named(node))

    def _spread_element(self, node: Node) -> ESTreeNode:
        return self._make(node, "SpreadElement", argument=self._first_named(node))

    def _variable_declaration(self, node: Node) -> ESTreeNode:
        kind = "var" if node.type == "variable_declaration" else self.text(node.children[0])
        declarations = [child for child in self._named(node) if child.type == "variable_declarator"]
        return self._make(node, "VariableDeclaration", kind=kind, declarations=declarations)

    def _variable_declarator(self, node: Node) -> ESTreeNode:
        return self._make(
            node,
            "VariableDeclarator",
            id=node.child_by_field_name("name"),
            init=node.child_by_field_name("value"),
        )


def to_estree(node: Node, source: str) -> ESTreeNode:
    """Convert a tree-sitter node (usually the root) into an ESTree-shaped dict."""
    return ESTreeConverter(source).convert(node)
