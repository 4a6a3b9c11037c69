from .ast_walker import ASTWalker
from .estree import ESTreeConverter, to_estree
from .models import ParseResult
from .parser import JSParser

__all__ = ["ASTWalker", "ESTreeConverter", "JSParser", "ParseResult", "to_estree"]
