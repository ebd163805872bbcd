"""
model_debug.py
Readable dumps of the struct model and the protobuf model, used by verbose runs.
"""
from typing import List

from proto_model import ProtoMessage
from struct_model import (
    GenericWrapperType,
    GoType,
    MapType,
    NamedType,
    PointerType,
    PrimitiveType,
    SliceType,
    TypeDeclaration,
)


def format_type(type_expr: GoType) -> str:
    """Write a type expression back in Go syntax."""
    if isinstance(type_expr, PrimitiveType):
        return type_expr.name
    if isinstance(type_expr, PointerType):
        return f"*{format_type(type_expr.inner)}"
    if isinstance(type_expr, SliceType):
        return f"[{type_expr.length or ''}]{format_type(type_expr.element)}"
    if isinstance(type_expr, MapType):
        return f"map[{format_type(type_expr.key)}]{format_type(type_expr.value)}"
    if isinstance(type_expr, GenericWrapperType):
        return f"{type_expr.identifier}[{format_type(type_expr.inner)}]"
    if isinstance(type_expr, NamedType):
        args = ""
        if type_expr.type_args:
            args = f"[{', '.join(format_type(a) for a in type_expr.type_args)}]"
        return f"{type_expr.qualified_name}{args}"
    return type_expr.kind


def format_declaration(declaration: TypeDeclaration) -> str:
    lines = [f"type {declaration.name} ({'struct' if declaration.is_struct else format_type(declaration.type)})"]
    for field in declaration.fields:
        details = [f"type='{format_type(field.type)}'"]
        if field.embedded:
            details.append("embedded=True")
        if field.tag:
            details.append(f"tag={field.tag}")
        if field.line is not None:
            details.append(f"line={field.line}")
        lines.append(f"  {', '.join(field.names)}: {', '.join(details)}")
    return "\n".join(lines)


def format_proto_tree(message: ProtoMessage, indent_level: int = 0) -> str:
    lines: List[str] = []
    ind = '  ' * indent_level
    lines.append(f"{ind}Message {message.name}")
    for field in message.fields:
        lines.append(f"{ind}  #{field.number} {field.name}: {field.type_name} <- {field.source_names}")
        for nested in field.nested_messages:
            lines.append(format_proto_tree(nested, indent_level + 2))
    return "\n".join(lines)
