import pytest
from go_file_loader import load_go_file, load_go_source
from struct_errors import DeclarationNotFoundError, SelfReferentialStructureError
from struct_resolver import check_recursive_struct, find_recursive_field, find_struct_declaration


def test_find_struct_declaration(example_go_path):
    source = load_go_file(example_go_path)
    declaration = find_struct_declaration(source, 'MyStruct')
    assert declaration.name == 'MyStruct'
    # A plain declaration list works as well
    assert find_struct_declaration(source.declarations, 'NestedStruct').name == 'NestedStruct'


def test_missing_struct_raises(example_go_path):
    source = load_go_file(example_go_path)
    with pytest.raises(DeclarationNotFoundError) as excinfo:
        find_struct_declaration(source, 'Missing')
    assert str(excinfo.value) == "struct 'Missing' not found in the Go source file"


def test_non_struct_declaration_is_not_found(customer_go_path):
    source = load_go_file(customer_go_path)
    with pytest.raises(DeclarationNotFoundError):
        find_struct_declaration(source, 'Color')


def test_self_pointer_is_rejected(example_go_path):
    source = load_go_file(example_go_path)
    declaration = find_struct_declaration(source, 'MyStructRecursive')
    assert find_recursive_field(declaration) == 'Nested'
    with pytest.raises(SelfReferentialStructureError) as excinfo:
        check_recursive_struct(declaration)
    assert excinfo.value.field_name == 'Nested'
    assert excinfo.value.struct_name == 'MyStructRecursive'


def test_guard_only_checks_direct_pointer_fields():
    src = '''
type Node struct {
	Value    int
	Children []*Node
	Parent   *other.Node
}
'''
    declaration = find_struct_declaration(load_go_source(src), 'Node')
    assert find_recursive_field(declaration) is None
    check_recursive_struct(declaration)


def test_plain_struct_passes_guard(example_go_path):
    source = load_go_file(example_go_path)
    check_recursive_struct(find_struct_declaration(source, 'MyStruct'))
