from pathlib import Path
from typing import List

import tree_sitter_javascript as tsjs
from tree_sitter import Language, Node, Parser

from .models import ParseResult


class JSParser:
    """Parses JavaScript source with the tree-sitter JavaScript grammar"""

    def __init__(self):
        self.language = Language(tsjs.language())
        self.parser = Parser(self.language)

    def parse_string(self, source: str) -> ParseResult:
        tree = self.parser.parse(source.encode("utf-8"))
        return ParseResult(tree=tree, source=source, errors=self._collect_errors(tree.root_node))

    def parse_file(self, file_path: Path) -> ParseResult:
        source = Path(file_path).read_text(encoding="utf-8")
        return self.parse_string(source)

    def _collect_errors(self, root: Node) -> List[str]:
        errors = []
        if not root.has_error:
            return errors

        stack = [root]
        while stack:
            node = stack.pop()
            line, column = node.start_point[0] + 1, node.start_point[1]
            if node.type == "ERROR":
                errors.append(f"{line}:{column}: syntax error")
            elif node.is_missing:
                errors.append(f"{line}:{column}: missing {node.type}")
            stack.extend(child for child in reversed(node.children) if child.has_error or child.is_missing)
        return errors
