"""
Structural fingerprints: a document reduced to a set of hashed subtree shapes.

The comparison engine only consumes the resulting hash sets, so any parser can
be plugged in as a fingerprinter. The default one understands Python source.
"""

import ast
import hashlib
from typing import Callable, Dict, Set

from simcheck.utils.errors import AlgorithmUnavailable

Fingerprinter = Callable[[str], Set[int]]


class IdentifierNormalizer(ast.NodeTransformer):
    """Rename identifiers to positional placeholders and drop docstrings/string literals.

    Two programs that differ only in naming produce identical trees.
    """

    def __init__(self):
        self.name_map: Dict[str, str] = {}

    def _placeholder(self, original: str) -> str:
        if original not in self.name_map:
            self.name_map[original] = f"id_{len(self.name_map)}"
        return self.name_map[original]

    @staticmethod
    def _strip_docstring(node):
        if (node.body and isinstance(node.body[0], ast.Expr) and
                isinstance(node.body[0].value, ast.Constant) and
                isinstance(node.body[0].value.value, str)):
            node.body = node.body[1:] or [ast.Pass()]

    def visit_Name(self, node: ast.Name) -> ast.Name:
        node.id = self._placeholder(node.id)
        return node

    def visit_arg(self, node: ast.arg) -> ast.arg:
        node.arg = self._placeholder(node.arg)
        node.annotation = None
        return node

    def visit_Attribute(self, node: ast.Attribute) -> ast.Attribute:
        node.attr = self._placeholder(node.attr)
        return self.generic_visit(node)

    def _visit_definition(self, node):
        node.name = self._placeholder(node.name)
        self._strip_docstring(node)
        return self.generic_visit(node)

    visit_FunctionDef = _visit_definition
    visit_AsyncFunctionDef = _visit_definition
    visit_ClassDef = _visit_definition

    def visit_Constant(self, node: ast.Constant) -> ast.Constant:
        if isinstance(node.value, str):
            node.value = "<str>"
        return node


def _subtree_hash(node: ast.AST) -> int:
    dump = ast.dump(node, annotate_fields=False)
    return int.from_bytes(hashlib.blake2b(dump.encode("utf8"), digest_size=8).digest(), "big")


def python_fingerprint(code: str) -> Set[int]:
    """Hash every statement and expression subtree of normalized Python source.

    Text that parses only as bare expressions (a word, a comma list, `a - b`)
    carries no program structure and is reported as unavailable.
    """
    try:
        tree = ast.parse(code)
    except (SyntaxError, ValueError) as e:
        raise AlgorithmUnavailable("ast", f"not parseable as Python: {e}") from e
    except (RecursionError, MemoryError) as e:
        raise AlgorithmUnavailable("ast", f"too deeply nested to parse: {type(e).__name__}") from e

    if all(isinstance(stmt, ast.Expr) for stmt in tree.body):
        raise AlgorithmUnavailable("ast", "no statements beyond bare expressions")

    try:
        tree = IdentifierNormalizer().visit(tree)
        hashes = {
            _subtree_hash(node)
            for node in ast.walk(tree)
            if isinstance(node, (ast.stmt, ast.expr))
        }
    except (RecursionError, MemoryError) as e:
        raise AlgorithmUnavailable("ast", f"too deeply nested to fingerprint: {type(e).__name__}") from e
    return hashes


def structural_similarity(fp_a: Set[int], fp_b: Set[int]) -> float:
    union = fp_a | fp_b
    if not union:
        return 0.0
    return len(fp_a & fp_b) / len(union)
