"""
struct_resolver.py
Finds the requested struct declaration and rejects structs that point directly at themselves.
"""
from typing import Iterable, Optional, Union

from struct_errors import DeclarationNotFoundError, SelfReferentialStructureError
from struct_model import GoSourceFile, NamedType, PointerType, TypeDeclaration


def find_struct_declaration(source: Union[GoSourceFile, Iterable[TypeDeclaration]], struct_name: str) -> TypeDeclaration:
    """
    Return the struct declaration called struct_name.
    Raises DeclarationNotFoundError if there is none, or if the name belongs to a non-struct type.
    """
    declarations = source.declarations if isinstance(source, GoSourceFile) else source
    for declaration in declarations:
        if declaration.name == struct_name and declaration.is_struct:
            return declaration
    raise DeclarationNotFoundError(struct_name)


def find_recursive_field(declaration: TypeDeclaration) -> Optional[str]:
    """
    Only the direct fields are inspected: a field typed as a pointer to the declaration itself.
    Cycles through other structs are left to the message builder.
    """
    for field in declaration.fields:
        field_type = field.type
        if (isinstance(field_type, PointerType)
                and isinstance(field_type.inner, NamedType)
                and field_type.inner.package is None
                and field_type.inner.identifier == declaration.name):
            return field.name
    return None


def check_recursive_struct(declaration: TypeDeclaration) -> None:
    field_name = find_recursive_field(declaration)
    if field_name is not None:
        raise SelfReferentialStructureError(declaration.name, field_name)
