import os
from proto_generator import (
    ProtoGenerator,
    generate_proto_file_content,
    generate_proto_message,
    write_proto_file,
)
from proto_model import ProtoMessage


def test_flat_message():
    message = ProtoMessage('Flat')
    message.add_field('string', 'name')
    message.add_field('repeated int32', 'ids')
    assert ProtoGenerator(message).generate() == (
        "message Flat {\n"
        "  string name = 1;\n"
        "  repeated int32 ids = 2;\n"
        "}"
    )


def test_nested_messages_are_indented_per_depth():
    inner = ProtoMessage('Inner')
    inner.add_field('bool', 'flag')
    middle = ProtoMessage('Middle')
    middle.add_field('Inner', 'inner', nested_messages=[inner])
    outer = ProtoMessage('Outer')
    outer.add_field('int64', 'id')
    outer.add_field('Middle', 'middle', nested_messages=[middle])
    assert generate_proto_message(outer) == (
        "message Outer {\n"
        "  int64 id = 1;\n"
        "  message Middle {\n"
        "    message Inner {\n"
        "      bool flag = 1;\n"
        "    }\n"
        "    Inner inner = 1;\n"
        "  }\n"
        "  Middle middle = 2;\n"
        "}"
    )


def test_empty_message():
    assert generate_proto_message(ProtoMessage('Empty')) == "message Empty {\n}"


def test_file_content_preamble():
    content = generate_proto_file_content("message A {\n}")
    assert content == "syntax = 'proto3';\n\npackage my_package;\n\nmessage A {\n}"
    assert generate_proto_file_content("message A {\n}", "shop.v1").startswith("syntax = 'proto3';\n\npackage shop.v1;\n")


def test_write_proto_file(temp_dir):
    out_path = os.path.join(temp_dir, 'out.proto')
    write_proto_file(out_path, "message A {\n}")
    with open(out_path, 'r', encoding='utf-8') as f:
        assert f.read() == "message A {\n}"
