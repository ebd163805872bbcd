# go_file_loader.py
# Reads Go source files and builds the struct model (GoSourceFile) from the lark parse tree.
from typing import Dict, Optional, Set

from lark import Transformer
from lark.exceptions import UnexpectedInput

from lark_parser import parse_go_source
from struct_errors import ParseFailureError
from struct_model import (
    GoImport,
    GoSourceFile,
    GoType,
    Field,
    GenericWrapperType,
    MapType,
    NamedType,
    PointerType,
    PrimitiveType,
    SliceType,
    StructType,
    TypeDeclaration,
    TypeParameter,
)

GO_PRIMITIVE_TYPES = {
    'bool', 'string',
    'int', 'int8', 'int16', 'int32', 'int64',
    'uint', 'uint8', 'uint16', 'uint32', 'uint64', 'uintptr',
    'float32', 'float64', 'complex64', 'complex128',
    'byte', 'rune',
}

# (package, identifier) of generic types that only mark their argument as optional
OPTIONAL_WRAPPERS = {('opt', 'Opt')}


def load_go_file(go_file_path: str) -> GoSourceFile:
    with open(go_file_path, 'r', encoding='utf-8') as f:
        text = f.read()
    return load_go_source(text, file=go_file_path)


def load_go_source(text: str, file: Optional[str] = None) -> GoSourceFile:
    try:
        tree = parse_go_source(text)
    except UnexpectedInput as e:
        line = getattr(e, 'line', None)
        column = getattr(e, 'column', None)
        summary = str(e).strip().splitlines()[0] if str(e).strip() else type(e).__name__
        raise ParseFailureError(f"{file or '<source>'}:{line}:{column}: {summary}", line, column) from e
    source_file = GoModelTransformer().transform(tree)
    source_file.file = file
    _link_named_types(source_file)
    return source_file


class GoModelTransformer(Transformer):
    """Builds struct_model objects bottom-up from the parse tree."""

    def start(self, items):
        package = None
        imports = []
        declarations = []
        for item in items:
            if isinstance(item, str):
                package = item
                continue
            for entry in item:
                if isinstance(entry, GoImport):
                    imports.append(entry)
                else:
                    declarations.append(entry)
        return GoSourceFile(package, imports, declarations)

    def package_clause(self, items):
        return str(items[0])

    def import_decl(self, items):
        return list(items)

    def import_spec(self, items):
        alias, path = items
        return GoImport(str(path)[1:-1], str(alias) if alias is not None else None)

    def type_decl(self, items):
        return list(items)

    def type_def(self, items):
        name, type_params, type_expr = items
        return TypeDeclaration(str(name), type_expr, type_params, is_alias=False, line=name.line)

    def type_alias(self, items):
        name, type_params, type_expr = items
        return TypeDeclaration(str(name), type_expr, type_params, is_alias=True, line=name.line)

    def type_params(self, items):
        return [param for group in items for param in group]

    def type_param(self, items):
        *names, constraint = items
        return [TypeParameter(str(name), constraint) for name in names]

    def type_constraint(self, items):
        return list(items)

    def constraint_term(self, items):
        # ~T approximations constrain like T here
        return items[-1]

    def type_name(self, items):
        name = str(items[0])
        if name in GO_PRIMITIVE_TYPES:
            return PrimitiveType(name)
        return NamedType(name)

    def qualified_type(self, items):
        package, name = items
        return NamedType(str(name), package=str(package))

    def generic_type(self, items):
        base, *args = items
        if not isinstance(base, NamedType):
            return base
        if (base.package, base.identifier) in OPTIONAL_WRAPPERS and len(args) == 1:
            return GenericWrapperType(base.qualified_name, args[0])
        return NamedType(base.identifier, package=base.package, type_args=args)

    def pointer_type(self, items):
        return PointerType(items[0])

    def pointer_embedded(self, items):
        return PointerType(items[0])

    def slice_type(self, items):
        return SliceType(items[0])

    def array_type(self, items):
        length, element = items
        return SliceType(element, length=length)

    def array_length(self, items):
        return str(items[0])

    def map_type(self, items):
        key, value = items
        return MapType(key, value)

    def struct_type(self, items):
        return StructType(list(items))

    def named_field(self, items):
        *names, type_expr, tag = items
        return Field(
            [str(name) for name in names],
            _name_anonymous_structs(type_expr, str(names[0])),
            tag=tag,
            line=names[0].line,
        )

    def embedded_field(self, items):
        type_expr, tag = items
        return Field([_embedded_name(type_expr)], type_expr, tag=tag, embedded=True)

    def tag(self, items):
        return str(items[0])

    def interface_type(self, items):
        return NamedType('any')

    def interface_elem(self, items):
        return None

    def method_spec(self, items):
        return None

    def func_type(self, items):
        return NamedType('func')

    def chan_type(self, items):
        return NamedType('chan')

    # Functions, methods, vars and consts declare no types
    def func_decl(self, items):
        return []

    def value_decl(self, items):
        return []

    def value_spec(self, items):
        return None


def _embedded_name(type_expr: GoType) -> str:
    while isinstance(type_expr, PointerType):
        type_expr = type_expr.inner
    if isinstance(type_expr, NamedType):
        return type_expr.identifier
    if isinstance(type_expr, GenericWrapperType):
        return type_expr.identifier.split('.')[-1]
    return getattr(type_expr, 'name', '?')


def _name_anonymous_structs(type_expr: GoType, name: str) -> GoType:
    """
    Replace struct literals inside a field type with references to a synthetic declaration
    named after the field, so they expand like any declared struct.
    """
    if isinstance(type_expr, StructType):
        return NamedType(name, declaration=TypeDeclaration(name, type_expr))
    if isinstance(type_expr, PointerType):
        return PointerType(_name_anonymous_structs(type_expr.inner, name))
    if isinstance(type_expr, SliceType):
        return SliceType(_name_anonymous_structs(type_expr.element, name), length=type_expr.length)
    if isinstance(type_expr, MapType):
        return MapType(type_expr.key, _name_anonymous_structs(type_expr.value, name))
    if isinstance(type_expr, GenericWrapperType):
        return GenericWrapperType(type_expr.identifier, _name_anonymous_structs(type_expr.inner, name))
    return type_expr


def _link_named_types(source_file: GoSourceFile) -> None:
    by_name: Dict[str, TypeDeclaration] = {}
    for declaration in source_file.declarations:
        by_name.setdefault(declaration.name, declaration)
    for declaration in source_file.declarations:
        shadowed = {param.name for param in declaration.type_params}
        _link_type(declaration.type, by_name, shadowed)


def _link_type(type_expr: GoType, by_name: Dict[str, TypeDeclaration], shadowed: Set[str]) -> None:
    if isinstance(type_expr, NamedType):
        for arg in type_expr.type_args:
            _link_type(arg, by_name, shadowed)
        if type_expr.declaration is not None:
            # Synthetic declaration of an anonymous struct
            _link_type(type_expr.declaration.type, by_name, shadowed)
        elif type_expr.package is None and type_expr.identifier not in shadowed:
            type_expr.declaration = by_name.get(type_expr.identifier)
    elif isinstance(type_expr, StructType):
        for field in type_expr.fields:
            _link_type(field.type, by_name, shadowed)
    elif isinstance(type_expr, PointerType):
        _link_type(type_expr.inner, by_name, shadowed)
    elif isinstance(type_expr, SliceType):
        _link_type(type_expr.element, by_name, shadowed)
    elif isinstance(type_expr, MapType):
        _link_type(type_expr.key, by_name, shadowed)
        _link_type(type_expr.value, by_name, shadowed)
    elif isinstance(type_expr, GenericWrapperType):
        _link_type(type_expr.inner, by_name, shadowed)
