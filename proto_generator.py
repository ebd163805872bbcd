"""
proto_generator.py
Renders a ProtoMessage tree as protobuf schema text.

Every nesting level is indented by two spaces. Nested messages are written directly in front
of the field that uses them, one level deeper than the enclosing message's fields:

    message MyStruct {
      int32 field1 = 1;
      message NestedStruct {
        string name = 1;
      }
      NestedStruct nested = 2;
    }
"""
from typing import List

from proto_model import ProtoMessage

INDENT = "  "
DEFAULT_PACKAGE = "my_package"


class ProtoGenerator:
    def __init__(self, message: ProtoMessage):
        self.message = message

    def generate(self) -> str:
        return "\n".join(self._render_message(self.message, 0))

    def _render_message(self, message: ProtoMessage, depth: int) -> List[str]:
        pad = INDENT * depth
        lines = [f"{pad}message {message.name} {{"]
        for field in message.fields:
            for nested in field.nested_messages:
                lines.extend(self._render_message(nested, depth + 1))
            lines.append(f"{pad}{INDENT}{field.type_name} {field.name} = {field.number};")
        lines.append(f"{pad}}}")
        return lines


def generate_proto_message(message: ProtoMessage) -> str:
    return ProtoGenerator(message).generate()


def generate_proto_file_content(message_text: str, package_name: str = DEFAULT_PACKAGE) -> str:
    """Wrap rendered message text in the proto3 file preamble."""
    return f"syntax = 'proto3';\n\npackage {package_name};\n\n{message_text}"


def write_proto_file(out_path: str, content: str) -> None:
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(content)
