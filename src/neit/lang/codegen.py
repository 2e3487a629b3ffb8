"""
C Code Generator for Neit
=========================

This module generates C source text from the Neit AST. The output is
handed to a native C compiler (clang by default) to build the program.

Code Generation Strategy
------------------------
One pass over the AST fills three buffers:

| Buffer          | Filled by                                   |
|-----------------|---------------------------------------------|
| imports         | ImportDeclaration: #include and constants   |
| side functions  | ImportDeclaration: library helper functions |
| main body       | WriteStatement: one write() call each       |

and the program is assembled as::

    <imports>
    <blank line>
    <side functions>
    <blank line>
    int main(int argc, char const *argv[]) {
    <main body>
    }

The generator cannot fail: the parser only produces valid nodes.

Known quirks of the generated code
----------------------------------
- ``STDOUT`` is bound to 0 and ``STDERR`` to 1, while write statements
  emit the literal stream codes 1 (stdout) and 0 (stderr). The constants
  are never referenced by generated code.
- The ``count()`` helper never advances its pointer and would loop
  forever on a non-empty string. Nothing calls it.

Usage
-----
>>> from neit.lang.parser import parse_source
>>> from neit.lang.codegen import generate
>>> print(generate(parse_source('cimport cstd\\n_wrt(stdout, "hi", 2)')))
"""

from neit.lang.ast import (
    ASTNode,
    ASTVisitor,
    ImportDeclaration,
    WriteStatement,
)


MAIN_HEADER = "int main(int argc, char const *argv[]) {\n"
MAIN_FOOTER = "\n}"

CSTD_PREAMBLE = (
    "#include <unistd.h>\n"
    "int STDOUT = 0;\n"
    "int STDERR = 1;\n"
)

CSTD_COUNT_HELPER = (
    "int count(const char *str) {\n"
    "    int c = 0;\n"
    "    while (*str) {\n"
    "        c += 1;\n"
    "    }\n"
    "    return c;\n"
    "}\n"
)

# library name -> (preamble, side functions)
LIBRARY_SUPPORT: dict[str, tuple[str, str]] = {
    "cstd": (CSTD_PREAMBLE, CSTD_COUNT_HELPER),
}


def trim_quotes(text: str) -> str:
    """Strip every leading and trailing single or double quote."""
    return text.strip("\"'")


class CodeGenerator(ASTVisitor):
    """
    Generates C source from a list of Neit AST nodes.

    A generator instance can be reused; every call to generate() starts
    from empty buffers, so equal input always yields identical output.
    """

    def __init__(self):
        self._imports: list[str] = []
        self._side_functions: list[str] = []
        self._main_body: list[str] = []
        self._libraries: set[str] = set()

    def generate(self, nodes: list[ASTNode]) -> str:
        """
        Generate C source code from AST nodes.

        Args:
            nodes: The parsed program

        Returns:
            Complete C translation unit
        """
        self._imports = []
        self._side_functions = []
        self._main_body = []
        self._libraries = set()

        for node in nodes:
            self.visit(node)

        return (
            "".join(self._imports)
            + "\n"
            + "".join(self._side_functions)
            + "\n"
            + MAIN_HEADER
            + "".join(self._main_body)
            + MAIN_FOOTER
            + "\n"
        )

    def visit_ImportDeclaration(self, node: ImportDeclaration) -> None:
        # Each library is emitted once so repeated imports still compile
        if node.library in self._libraries:
            return
        support = LIBRARY_SUPPORT.get(node.library)
        if support is None:
            return
        self._libraries.add(node.library)
        preamble, side_functions = support
        self._imports.append(preamble)
        self._side_functions.append(side_functions)

    def visit_WriteStatement(self, node: WriteStatement) -> None:
        self._main_body.append(
            f'    write({node.stream}, "{trim_quotes(node.text)}", {node.length});\n'
        )


def generate(nodes: list[ASTNode]) -> str:
    """Generate C source from AST nodes (see CodeGenerator.generate)."""
    return CodeGenerator().generate(nodes)
