# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Specifier extractor for JavaScript check files.

Check scripts are not always conventional modules, so the grammar accepts
top-level return statements and import/export in any statement position.

Supports:
- require('x') and module.require('x')
- require(`x`) when the template has no substitutions
- import ... from 'x' and import 'x'
- Re-exports: export { a } from 'x', export * from 'x'

Calls such as require(pkgName) or require(`./${name}`) cannot be resolved
statically and are skipped without error.

The tree-sitter JavaScript grammar includes JSX, so elements such as
<div/> parse without error even though plain .js check runtimes reject
them. Those files fail when the check runs, not during resolution.
"""

from typing import Any, Optional

from tree_sitter import Language

from check_deps.extractors.base import TreeSitterExtractor
from check_deps.extractors.syntax import node_text, string_value, template_value
from check_deps.models import ParsedModule, SourceVariant


class JavaScriptExtractor(TreeSitterExtractor):
    """Extractor for variant A (JavaScript) sources."""

    grammar_package = "tree-sitter-javascript"

    def _load_language(self) -> Language:
        import tree_sitter_javascript

        return Language(tree_sitter_javascript.language())

    def _visit(self, node: Any, module: ParsedModule) -> None:
        if node.type == "call_expression":
            self._visit_call(node, module)
        else:
            super()._visit(node, module)

    def _visit_call(self, node: Any, module: ParsedModule) -> None:
        arguments = node.child_by_field_name("arguments")
        # Tagged templates (require`x`) have a template_string here instead
        if arguments is None or arguments.type != "arguments":
            return
        if not self._is_require_callee(node.child_by_field_name("function")):
            return

        args = [child for child in arguments.named_children if child.type != "comment"]
        if not args:
            # require() with no arguments
            return
        module.register(self._require_argument(args[0]))

    @staticmethod
    def _is_require_callee(callee: Any) -> bool:
        if callee is None:
            return False
        if callee.type == "identifier":
            return node_text(callee) == "require"
        if callee.type == "member_expression":
            obj = callee.child_by_field_name("object")
            prop = callee.child_by_field_name("property")
            return (
                obj is not None
                and prop is not None
                and obj.type == "identifier"
                and node_text(obj) == "module"
                and node_text(prop) == "require"
            )
        return False

    @staticmethod
    def _require_argument(arg: Any) -> Optional[str]:
        if arg.type == "string":
            return string_value(arg)
        if arg.type == "template_string":
            return template_value(arg)
        return None

    def variant(self) -> str:
        return SourceVariant.JAVASCRIPT

    def name(self) -> str:
        return "JavaScriptExtractor"
