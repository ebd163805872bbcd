"""
struct_model.py
Raw representation of a parsed Go source file: type declarations, struct fields and
type expressions, exactly as they were written. Nothing here knows about protobuf.
"""
from typing import List, Optional


class GoType:
    """Base class of the type expression variants."""
    kind = "?"

    def __eq__(self, other):
        return type(self) is type(other) and self.__dict__ == other.__dict__

    def __ne__(self, other):
        return not self == other

    __hash__ = None


class PrimitiveType(GoType):
    kind = "primitive"

    def __init__(self, name: str):
        self.name = name

    def __repr__(self):
        return f"PrimitiveType({self.name!r})"


class PointerType(GoType):
    kind = "pointer"

    def __init__(self, inner: GoType):
        self.inner = inner

    def __repr__(self):
        return f"PointerType({self.inner!r})"


class SliceType(GoType):
    """Slices and fixed-size arrays; `length` is only set for arrays."""
    kind = "slice"

    def __init__(self, element: GoType, length: Optional[str] = None):
        self.element = element
        self.length = length

    def __repr__(self):
        return f"SliceType({self.element!r}, length={self.length!r})"


class MapType(GoType):
    kind = "map"

    def __init__(self, key: GoType, value: GoType):
        self.key = key
        self.value = value

    def __repr__(self):
        return f"MapType({self.key!r}, {self.value!r})"


class NamedType(GoType):
    """
    A reference to a type by name, optionally package qualified (time.Time).
    `declaration` is linked by the loader when the name matches a declaration of the same file.
    """
    kind = "named"

    def __init__(self, identifier: str, package: Optional[str] = None, type_args: Optional[List[GoType]] = None,
                 declaration: Optional['TypeDeclaration'] = None):
        self.identifier = identifier
        self.package = package
        self.type_args = type_args or []
        self.declaration = declaration

    @property
    def qualified_name(self) -> str:
        return f"{self.package}.{self.identifier}" if self.package else self.identifier

    def __eq__(self, other):
        # Declarations are compared by identity so linked cycles don't recurse.
        return (type(self) is type(other)
                and self.identifier == other.identifier
                and self.package == other.package
                and self.type_args == other.type_args
                and self.declaration is other.declaration)

    def __repr__(self):
        linked = ", linked" if self.declaration is not None else ""
        return f"NamedType({self.qualified_name!r}{linked})"


class GenericWrapperType(GoType):
    """A generic optional marker such as opt.Opt[T]; only the inner argument matters."""
    kind = "generic_wrapper"

    def __init__(self, identifier: str, inner: GoType):
        self.identifier = identifier
        self.inner = inner

    def __repr__(self):
        return f"GenericWrapperType({self.identifier!r}, {self.inner!r})"


class StructType(GoType):
    """A struct literal; only ever the right-hand side of a TypeDeclaration."""
    kind = "struct"

    def __init__(self, fields: List['Field']):
        self.fields = fields

    def __repr__(self):
        return f"StructType({len(self.fields)} fields)"


class Field:
    def __init__(self, names: List[str], type_expr: GoType, tag: Optional[str] = None,
                 line: Optional[int] = None, embedded: bool = False):
        self.names = names
        self.type = type_expr
        self.tag = tag
        self.line = line
        self.embedded = embedded

    @property
    def name(self) -> str:
        """The first declared name; ordering and grouping only look at this one."""
        return self.names[0]

    def __repr__(self):
        return f"Field({', '.join(self.names)}: {self.type!r})"


class TypeParameter:
    def __init__(self, name: str, constraint: List[GoType]):
        self.name = name
        self.constraint = constraint

    def __repr__(self):
        return f"TypeParameter({self.name!r})"


class TypeDeclaration:
    def __init__(self, name: str, type_expr: GoType, type_params: Optional[List[TypeParameter]] = None,
                 is_alias: bool = False, line: Optional[int] = None):
        self.name = name
        self.type = type_expr
        self.type_params = type_params or []
        self.is_alias = is_alias
        self.line = line

    @property
    def is_struct(self) -> bool:
        return isinstance(self.type, StructType)

    def resolve_alias(self) -> 'TypeDeclaration':
        """
        Follow `type A = B` to the declaration of B, through any chain of aliases.
        Returns self when this is not an alias of a declared type.
        """
        declaration = self
        seen = []
        while (declaration.is_alias and isinstance(declaration.type, NamedType)
               and declaration.type.declaration is not None
               and not any(entry is declaration for entry in seen)):
            seen.append(declaration)
            declaration = declaration.type.declaration
        return declaration

    @property
    def fields(self) -> List[Field]:
        return self.type.fields if isinstance(self.type, StructType) else []

    def __repr__(self):
        return f"TypeDeclaration({self.name!r}, {self.type!r})"


class GoImport:
    def __init__(self, path: str, alias: Optional[str] = None):
        self.path = path
        self.alias = alias

    def __repr__(self):
        return f"GoImport({self.path!r}, alias={self.alias!r})"


class GoSourceFile:
    def __init__(self, package: Optional[str], imports: List[GoImport], declarations: List[TypeDeclaration],
                 file: Optional[str] = None):
        self.package = package
        self.imports = imports
        self.declarations = declarations
        self.file = file

    def find_declaration(self, name: str) -> Optional[TypeDeclaration]:
        for declaration in self.declarations:
            if declaration.name == name:
                return declaration
        return None

    @property
    def struct_declarations(self) -> List[TypeDeclaration]:
        return [d for d in self.declarations if d.is_struct]
