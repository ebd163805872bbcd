"""
proto_model_builder.py
Builds the ProtoMessage tree for a struct declaration: field ordering, grouping, numbering and
recursive expansion of nested structs.
"""
from typing import List

from field_grouping import GROUPING_DISABLED, UNGROUPED, group_fields_by_pascal_case, validate_grouping_threshold
from generator_utils import convert_to_snake_case
from proto_model import ProtoMessage
from struct_errors import CyclicStructureError
from struct_model import Field, TypeDeclaration
from struct_resolver import check_recursive_struct
from type_resolver import TypeResolver


class ProtoModelBuilder:
    def __init__(self, threshold: int = GROUPING_DISABLED, verbose: bool = False):
        validate_grouping_threshold(threshold)
        self.threshold = threshold
        self.verbose = verbose
        self.resolver = TypeResolver(self._expand_struct)
        self._in_progress: List[TypeDeclaration] = []

    def debug_print(self, message: str) -> None:
        if self.verbose:
            print(f"[DEBUG] {message}")

    @property
    def opaque_types(self) -> List[str]:
        return self.resolver.opaque_types

    def build(self, declaration: TypeDeclaration) -> ProtoMessage:
        """
        Build the message for `declaration`.

        Raises SelfReferentialStructureError when a direct field points back at the struct, and
        CyclicStructureError when expansion runs into any other cycle. Nothing is returned in
        either case, so callers never see a partial message.
        """
        check_recursive_struct(declaration)
        self._in_progress = []
        return self._expand_struct(declaration)

    def _expand_struct(self, declaration: TypeDeclaration) -> ProtoMessage:
        if any(entry is declaration for entry in self._in_progress):
            path = [entry.name for entry in self._in_progress] + [declaration.name]
            raise CyclicStructureError(path)
        self._in_progress.append(declaration)
        try:
            return self._build_message(declaration)
        finally:
            self._in_progress.pop()

    def _build_message(self, declaration: TypeDeclaration) -> ProtoMessage:
        depth = len(self._in_progress) - 1
        self.debug_print(f"{'  ' * depth}Building message {declaration.name} ({len(declaration.fields)} fields)")
        message = ProtoMessage(declaration.name)
        groups = group_fields_by_pascal_case(declaration.fields, self.threshold)

        for field in sorted(groups[UNGROUPED], key=lambda f: f.name):
            self._add_field(message, field)

        for key in sorted(k for k in groups if k != UNGROUPED):
            self.debug_print(f"{'  ' * depth}Group {key}: {[f.name for f in groups[key]]}")
            group_message = ProtoMessage(key)
            for field in groups[key]:
                self._add_field(group_message, field)
            message.add_field(key, convert_to_snake_case(key), nested_messages=[group_message],
                              source_names=[f.name for f in groups[key]])
        return message

    def _add_field(self, message: ProtoMessage, field: Field) -> None:
        resolved = self.resolver.resolve(field.type)
        message.add_field(
            resolved.type_name,
            convert_to_snake_case(', '.join(field.names)),
            nested_messages=resolved.nested_messages,
            source_names=list(field.names),
        )


def build_proto_message(declaration: TypeDeclaration, threshold: int = GROUPING_DISABLED,
                        verbose: bool = False) -> ProtoMessage:
    return ProtoModelBuilder(threshold, verbose).build(declaration)
