from typing import Any, Callable, Dict, Iterator, List

from tree_sitter import Node

ESTreeNode = Dict[str, Any]


class ASTWalker:
    """Utilities for traversing ESTree-shaped trees and tree-sitter nodes"""

    @staticmethod
    def is_node(value: Any) -> bool:
        return isinstance(value, dict) and isinstance(value.get("type"), str)

    @staticmethod
    def iter_children(node: ESTreeNode) -> Iterator[ESTreeNode]:
        """Yield the direct child nodes of an ESTree node in field order"""
        for key, value in node.items():
            if key in ("loc", "range"):
                continue
            if ASTWalker.is_node(value):
                yield value
            elif isinstance(value, list):
                for item in value:
                    if ASTWalker.is_node(item):
                        yield item

    @staticmethod
    def walk(node: ESTreeNode, callback: Callable[[ESTreeNode], None]):
        """Perform a depth-first, pre-order traversal of the tree"""
        stack = [node]
        while stack:
            current = stack.pop()
            callback(current)
            stack.extend(reversed(list(ASTWalker.iter_children(current))))

    @staticmethod
    def find_all_by_type(node: ESTreeNode, type_name: str) -> List[ESTreeNode]:
        """Find all descendant nodes of a specific type"""
        results = []

        def check(n):
            if n["type"] == type_name:
                results.append(n)

        ASTWalker.walk(node, check)
        return results

    @staticmethod
    def get_text(node: Any, source: str) -> str:
        """Source text covered by an ESTree node or a tree-sitter node"""
        if isinstance(node, Node):
            start, end = node.start_byte, node.end_byte
        else:
            start, end = node["range"]
        return source.encode("utf-8")[start:end].decode("utf-8")
