"""
proto_model.py
Generator-ready representation of the protobuf output: messages, numbered fields and the
nested messages that have to be written in front of a field.
"""
from typing import List, Optional


class ResolvedType:
    """
    The protobuf type of a Go type expression.
    `nested_messages` holds the expanded structs the type refers to, in emission order.
    """
    def __init__(self, type_name: str, nested_messages: Optional[List['ProtoMessage']] = None):
        self.type_name = type_name
        self.nested_messages = nested_messages or []

    def __repr__(self):
        return f"ResolvedType({self.type_name!r}, nested={[m.name for m in self.nested_messages]!r})"


class ProtoField:
    def __init__(self, type_name: str, name: str, number: int,
                 nested_messages: Optional[List['ProtoMessage']] = None,
                 source_names: Optional[List[str]] = None):
        self.type_name = type_name
        self.name = name
        self.number = number
        self.nested_messages = nested_messages or []
        self.source_names = source_names or []

    def __repr__(self):
        return f"ProtoField({self.type_name} {self.name} = {self.number})"


class ProtoMessage:
    def __init__(self, name: str):
        self.name = name
        self.fields: List[ProtoField] = []

    def add_field(self, type_name: str, name: str, nested_messages: Optional[List['ProtoMessage']] = None,
                  source_names: Optional[List[str]] = None) -> ProtoField:
        """Append a field with the next free number; numbers always run 1..n."""
        field = ProtoField(type_name, name, len(self.fields) + 1, nested_messages, source_names)
        self.fields.append(field)
        return field

    @property
    def nested_messages(self) -> List['ProtoMessage']:
        return [nested for field in self.fields for nested in field.nested_messages]

    def __repr__(self):
        return f"ProtoMessage({self.name!r}, {len(self.fields)} fields)"
