"""
struct_errors.py
Errors raised while turning a Go struct declaration into a protobuf message.
"""
from typing import List, Optional


class StructConversionError(Exception):
    pass


class InvalidConfigurationError(StructConversionError):
    pass


class ParseFailureError(StructConversionError):
    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.line = line
        self.column = column


class DeclarationNotFoundError(StructConversionError):
    def __init__(self, struct_name: str):
        super().__init__(f"struct '{struct_name}' not found in the Go source file")
        self.struct_name = struct_name


class SelfReferentialStructureError(StructConversionError):
    """
    The target struct has a direct field that points back to the struct itself.
    """
    def __init__(self, struct_name: str, field_name: str):
        super().__init__(
            f"struct contains a nested field of a same type that provokes infinite recursion: {field_name}"
        )
        self.struct_name = struct_name
        self.field_name = field_name


class CyclicStructureError(StructConversionError):
    """
    Expanding nested structs re-entered a struct that is still being expanded.
    """
    def __init__(self, path: List[str]):
        super().__init__(f"cyclic struct reference: {' -> '.join(path)}")
        self.path = path
