"""
Neit Abstract Syntax Tree (AST) Definitions
===========================================

A Neit program parses to a flat, ordered list of nodes; there is no
nesting because the language has no blocks or expressions.

Node Hierarchy
--------------
ASTNode (base)
├── ImportDeclaration - ``cimport cstd``
└── WriteStatement    - ``_wrt(stdout, "text", 4)``

Design Notes
------------
- All nodes are dataclasses
- Each node stores its source location for error reporting; the location
  is keyword-only and does not take part in equality, so
  ``WriteStatement(1, '"hi"', 2)`` compares equal to the parsed node
  wherever it appeared
"""

from dataclasses import dataclass, field
from typing import Optional

from neit.errors import SourceLocation


# =============================================================================
# AST Node Base Class
# =============================================================================

@dataclass
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location where this node appears
    """
    location: Optional[SourceLocation] = field(
        default=None, compare=False, repr=False, kw_only=True
    )


# =============================================================================
# Declaration and Statement Nodes
# =============================================================================

@dataclass
class ImportDeclaration(ASTNode):
    """
    A validated library import.

    Only ``cstd`` is accepted by the parser.

    Attributes:
        library: The library name
    """
    library: str = ""


# Stream selector codes stored in WriteStatement.stream. These are the
# values the language has always emitted: 'stdout' is 1 and 'stderr' is 0,
# even though the generated STDOUT/STDERR constants are bound the other
# way round.
STREAM_STDOUT = 1
STREAM_STDERR = 0

STREAM_SELECTORS: dict[str, int] = {
    "stdout": STREAM_STDOUT,
    "stderr": STREAM_STDERR,
}


@dataclass
class WriteStatement(ASTNode):
    """
    A buffered write: ``_wrt(stream, text, length)``.

    Attributes:
        stream: Stream selector code (1 for stdout, 0 for stderr)
        text: The payload exactly as written, quotes included
        length: The byte count declared by the author (not checked)
    """
    stream: int = STREAM_STDOUT
    text: str = ""
    length: int = 0


# =============================================================================
# Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Subclasses define ``visit_<ClassName>`` methods; nodes without one
    fall through to generic_visit.
    """

    def visit(self, node: ASTNode):
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        """Nodes have no children; unknown nodes are ignored."""
        return None


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Pretty printer for AST debugging.

    Usage:
        printer = ASTPrinter()
        print(printer.print(nodes))
    """

    def __init__(self):
        self.output: list[str] = []

    def print(self, nodes: list[ASTNode]) -> str:
        """Print the AST and return as string."""
        self.output = ["Program"]
        for node in nodes:
            self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        self.output.append(f"  {text}")

    def visit_ImportDeclaration(self, node: ImportDeclaration):
        self._emit(f"Import: {node.library}")

    def visit_WriteStatement(self, node: WriteStatement):
        self._emit(f"Write: stream={node.stream} text={node.text} length={node.length}")

    def generic_visit(self, node: ASTNode) -> None:
        self._emit(f"<{node.__class__.__name__}>")
