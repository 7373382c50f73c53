"""Go source parser built on Tree-sitter."""

import threading
from typing import Callable, List, Optional

import tree_sitter_language_pack

from ...domain.exceptions import ParserUnavailableError, SourceParseError
from ...domain.models.syntax import (
    CompositeLiteral,
    FieldDecl,
    FunctionDecl,
    GoSourceFile,
    ImportSpec,
    LiteralContext,
    StructDecl,
    TypeRef,
)


class GoParser:
    """
    Go parser using Tree-sitter.

    Turns a Go file into a GoSourceFile holding only what the validation
    engine reads:
    - package clause and import table
    - struct declarations with their fields (top-level and local)
    - function and method declarations with line spans and result types
    - composite literals with element counts and syntactic position

    Tree-sitter parsers are not thread-safe, so each thread gets its own.
    """

    LANGUAGE = "go"

    FUNCTION_NODES = ("function_declaration", "method_declaration")
    ASSIGNMENT_NODES = ("assignment_statement", "short_var_declaration")

    def __init__(self):
        """Initialize parser and fail fast if the Go grammar is missing."""
        self._local = threading.local()
        self._get_parser()

    def _get_parser(self):
        """Get this thread's Tree-sitter parser."""
        parser = getattr(self._local, "parser", None)
        if parser is None:
            try:
                parser = tree_sitter_language_pack.get_parser(self.LANGUAGE)
            except Exception as e:
                raise ParserUnavailableError(
                    f"Could not initialize Tree-sitter parser for {self.LANGUAGE}: {e}"
                ) from e
            self._local.parser = parser
        return parser

    def parse(
        self,
        content: bytes,
        path: str,
        resolve_package_path: Optional[Callable[[str], str]] = None,
    ) -> GoSourceFile:
        """
        Parse Go source.

        Args:
            content: Raw file content
            path: File path recorded on every extracted item
            resolve_package_path: Maps the package clause name to the
                package's import path; identity when omitted

        Returns:
            GoSourceFile

        Raises:
            SourceParseError: If the source has syntax errors or no package clause
        """
        tree = self._get_parser().parse(content)
        root = tree.root_node

        if root.has_error:
            raise SourceParseError(f"Syntax errors in {path}")

        package_name = self._package_name(root)
        if not package_name:
            raise SourceParseError(f"Missing package clause in {path}")

        package_path = (
            resolve_package_path(package_name) if resolve_package_path else package_name
        )

        source = GoSourceFile(
            path=path,
            package_name=package_name,
            package_path=package_path,
        )

        for node in self._walk(root):
            if node.type == "import_spec":
                self._add_import(node, source)
            elif node.type == "type_spec":
                self._add_struct(node, source)
            elif node.type in self.FUNCTION_NODES:
                self._add_function(node, source)
            elif node.type == "composite_literal":
                self._add_composite_literal(node, source)

        return source

    def _walk(self, root):
        """Yield every node in source order without recursion."""
        stack = [root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def _package_name(self, root) -> Optional[str]:
        for child in root.named_children:
            if child.type == "package_clause":
                for ident in child.named_children:
                    if ident.type in ("package_identifier", "identifier"):
                        return self._text(ident)
        return None

    def _add_import(self, node, source: GoSourceFile):
        path_node = node.child_by_field_name("path")
        if path_node is None:
            return

        name_node = node.child_by_field_name("name")
        source.imports.append(ImportSpec(
            path=self._text(path_node).strip('"`'),
            name=self._text(name_node) if name_node is not None else None,
        ))

    def _add_struct(self, node, source: GoSourceFile):
        name_node = node.child_by_field_name("name")
        type_node = node.child_by_field_name("type")
        if name_node is None or type_node is None or type_node.type != "struct_type":
            return

        fields = []
        for field_list in type_node.named_children:
            if field_list.type != "field_declaration_list":
                continue
            for field_node in field_list.named_children:
                if field_node.type != "field_declaration":
                    continue
                fields.append(FieldDecl(
                    names=[self._text(n) for n in field_node.children_by_field_name("name")],
                    type_ref=self._type_ref(field_node.child_by_field_name("type")),
                    line=self._line(field_node),
                ))

        source.structs.append(StructDecl(
            name=self._text(name_node),
            line=self._line(node),
            fields=fields,
        ))

    def _add_function(self, node, source: GoSourceFile):
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return

        source.functions.append(FunctionDecl(
            name=self._text(name_node),
            start_line=self._line(node),
            end_line=node.end_point[0] + 1,
            results=self._result_types(node.child_by_field_name("result")),
            is_method=node.type == "method_declaration",
        ))

    def _result_types(self, result) -> List[Optional[TypeRef]]:
        """
        Expand a result clause into one entry per declared result.

        ``T`` gives [T]; ``(a, b T, err error)`` gives [T, T, error].
        """
        if result is None:
            return []

        if result.type != "parameter_list":
            return [self._type_ref(result)]

        types = []
        for decl in result.named_children:
            if decl.type not in ("parameter_declaration", "variadic_parameter_declaration"):
                continue
            type_ref = self._type_ref(decl.child_by_field_name("type"))
            count = max(1, len(decl.children_by_field_name("name")))
            types.extend([type_ref] * count)
        return types

    def _add_composite_literal(self, node, source: GoSourceFile):
        body = node.child_by_field_name("body")
        elements = 0
        if body is not None:
            elements = sum(1 for child in body.named_children if child.type != "comment")

        source.composite_literals.append(CompositeLiteral(
            type_ref=self._type_ref(node.child_by_field_name("type")),
            line=self._line(node),
            element_count=elements,
            context=self._literal_context(node),
        ))

    def _literal_context(self, node) -> LiteralContext:
        """Classify a literal as a return value, assigned value, or bare expression."""
        parent = node.parent
        if parent is None:
            return LiteralContext.BARE

        if parent.type == "return_statement":
            return LiteralContext.RETURN

        if parent.type != "expression_list" or parent.parent is None:
            return LiteralContext.BARE

        owner = parent.parent
        if owner.type == "return_statement":
            return LiteralContext.RETURN

        if owner.type in self.ASSIGNMENT_NODES:
            value_node = owner.child_by_field_name("right")
        elif owner.type == "var_spec":
            value_node = owner.child_by_field_name("value")
        else:
            return LiteralContext.BARE

        if value_node is not None and value_node.start_byte == parent.start_byte:
            return LiteralContext.ASSIGNMENT
        return LiteralContext.BARE

    def _type_ref(self, node) -> Optional[TypeRef]:
        """Convert ``T`` or ``pkg.T`` nodes; anything else is None."""
        if node is None:
            return None

        if node.type == "type_identifier":
            return TypeRef(name=self._text(node))

        if node.type == "qualified_type":
            package_node = node.child_by_field_name("package")
            name_node = node.child_by_field_name("name")
            if package_node is None or name_node is None:
                return None
            return TypeRef(name=self._text(name_node), package=self._text(package_node))

        return None

    @staticmethod
    def _text(node) -> str:
        return node.text.decode("utf8")

    @staticmethod
    def _line(node) -> int:
        return node.start_point[0] + 1
