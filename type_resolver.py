"""
type_resolver.py
Maps Go type expressions to protobuf type names, expanding referenced structs into nested messages.
"""
from typing import Callable, List

from generator_utils import convert_type_to_protobuf, is_scalar_go_type
from proto_model import ProtoMessage, ResolvedType
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

# Package whose selectors lose their qualifier (opt.Value -> Value)
OPTIONAL_PACKAGE = 'opt'
OPTIONAL_WRAPPER = 'Opt'


class TypeResolver:
    """
    Resolves a type expression once into a ResolvedType.

    Struct expansion is delegated to `expand_struct`, which builds the nested message for a
    declaration; the caller owns ordering, numbering and cycle tracking.
    """

    def __init__(self, expand_struct: Callable[[TypeDeclaration], ProtoMessage]):
        self.expand_struct = expand_struct
        self.opaque_types: List[str] = []

    def resolve(self, type_expr: GoType) -> ResolvedType:
        if isinstance(type_expr, PrimitiveType):
            return ResolvedType(convert_type_to_protobuf(type_expr.name))
        if isinstance(type_expr, PointerType):
            return self.resolve(type_expr.inner)
        if isinstance(type_expr, SliceType):
            element = self.resolve(type_expr.element)
            return ResolvedType(f"repeated {element.type_name}", element.nested_messages)
        if isinstance(type_expr, MapType):
            key = self.resolve(type_expr.key)
            value = self.resolve(type_expr.value)
            return ResolvedType(f"map<{key.type_name}, {value.type_name}>",
                                key.nested_messages + value.nested_messages)
        if isinstance(type_expr, GenericWrapperType):
            # Optionality itself has no representation in the schema
            return self.resolve(type_expr.inner)
        if isinstance(type_expr, NamedType):
            return self._resolve_named(type_expr)
        # Struct literals are replaced by the loader; anything else is opaque
        name = getattr(type_expr, 'name', None) or type_expr.kind
        self._note_opaque(name)
        return ResolvedType(name)

    def _resolve_named(self, type_expr: NamedType) -> ResolvedType:
        declaration = type_expr.declaration
        if declaration is not None:
            declaration = declaration.resolve_alias()
            if declaration.is_struct:
                return ResolvedType(declaration.name, [self.expand_struct(declaration)])
        if type_expr.package == OPTIONAL_PACKAGE and type_expr.identifier == OPTIONAL_WRAPPER:
            # Wrapper without a type argument keeps its qualified name
            name = type_expr.qualified_name
        elif type_expr.package == OPTIONAL_PACKAGE:
            name = type_expr.identifier
        else:
            name = type_expr.qualified_name
        if declaration is None and not is_scalar_go_type(name):
            self._note_opaque(name)
        return ResolvedType(convert_type_to_protobuf(name))

    def _note_opaque(self, name: str) -> None:
        if name not in self.opaque_types:
            self.opaque_types.append(name)
