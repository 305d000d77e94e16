"""Syntax predicates over libcst nodes."""
from __future__ import annotations

import libcst as cst

_PROPERTY_DECORATORS = {"property", "cached_property"}
_ACCESSOR_ATTRIBUTES = {"getter", "setter", "deleter"}


def _decorator_is_property(decorator: cst.Decorator) -> bool:
    expr = decorator.decorator
    if isinstance(expr, cst.Call):
        expr = expr.func
    if isinstance(expr, cst.Name):
        return expr.value in _PROPERTY_DECORATORS
    if isinstance(expr, cst.Attribute):
        # functools.cached_property, or x.setter / x.getter / x.deleter
        return (
            expr.attr.value in _PROPERTY_DECORATORS
            or expr.attr.value in _ACCESSOR_ATTRIBUTES
        )
    return False


class PythonSyntaxFacts:
    """Shape checks used to validate and re-locate generated constructs."""

    def is_property_declaration(self, node: cst.CSTNode | None) -> bool:
        return isinstance(node, cst.FunctionDef) and any(
            _decorator_is_property(d) for d in node.decorators
        )

    def is_field_declaration(self, node: cst.CSTNode | None) -> bool:
        if isinstance(node, cst.SimpleStatementLine) and len(node.body) == 1:
            node = node.body[0]
        return isinstance(node, (cst.AnnAssign, cst.Assign))

    def is_class_declaration(self, node: cst.CSTNode | None) -> bool:
        return isinstance(node, cst.ClassDef)
