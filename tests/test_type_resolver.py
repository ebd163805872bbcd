from proto_model import ProtoMessage
from struct_model import (
    GenericWrapperType,
    MapType,
    NamedType,
    PointerType,
    PrimitiveType,
    SliceType,
    StructType,
    TypeDeclaration,
    Field,
)
from type_resolver import TypeResolver


def make_resolver():
    expanded = []

    def expand(declaration):
        expanded.append(declaration.name)
        return ProtoMessage(declaration.name)

    return TypeResolver(expand), expanded


def test_primitive_and_pointer():
    resolver, _ = make_resolver()
    assert resolver.resolve(PrimitiveType('int')).type_name == 'int32'
    assert resolver.resolve(PointerType(PrimitiveType('float32'))).type_name == 'double'


def test_maps_render_in_proto3_map_syntax_with_mapped_elements():
    resolver, _ = make_resolver()
    assert resolver.resolve(SliceType(PrimitiveType('int'))).type_name == 'repeated int32'
    assert resolver.resolve(SliceType(PrimitiveType('uint8'), length='16')).type_name == 'repeated uint32'
    resolved = resolver.resolve(MapType(PrimitiveType('string'), PrimitiveType('int16')))
    assert resolved.type_name == 'map<string, int32>'


def test_optional_wrapper_is_stripped():
    resolver, _ = make_resolver()
    assert resolver.resolve(GenericWrapperType('opt.Opt', PrimitiveType('uint64'))).type_name == 'uint64'
    assert resolver.resolve(NamedType('Value', package='opt')).type_name == 'Value'


def test_qualified_and_opaque_names():
    resolver, _ = make_resolver()
    assert resolver.resolve(NamedType('Time', package='time')).type_name == 'int64'
    assert resolver.resolve(NamedType('Decimal', package='decimal')).type_name == 'decimal.Decimal'
    assert resolver.resolve(NamedType('User')).type_name == 'User'
    assert resolver.opaque_types == ['decimal.Decimal', 'User']


def test_non_struct_declaration_passes_through_without_warning():
    resolver, expanded = make_resolver()
    color = TypeDeclaration('Color', PrimitiveType('int'))
    assert resolver.resolve(NamedType('Color', declaration=color)).type_name == 'Color'
    assert expanded == []
    assert resolver.opaque_types == []


def test_struct_references_expand_everywhere():
    resolver, expanded = make_resolver()
    address = TypeDeclaration('Address', StructType([Field(['City'], PrimitiveType('string'))]))
    ref = NamedType('Address', declaration=address)

    direct = resolver.resolve(ref)
    assert direct.type_name == 'Address'
    assert [m.name for m in direct.nested_messages] == ['Address']

    assert resolver.resolve(PointerType(ref)).type_name == 'Address'
    assert resolver.resolve(SliceType(PointerType(ref))).type_name == 'repeated Address'
    by_key = resolver.resolve(MapType(PrimitiveType('string'), ref))
    assert by_key.type_name == 'map<string, Address>'
    assert len(by_key.nested_messages) == 1
    assert resolver.resolve(GenericWrapperType('opt.Opt', ref)).type_name == 'Address'
    assert expanded == ['Address'] * 5


def test_bare_optional_wrapper_keeps_qualified_name():
    resolver, _ = make_resolver()
    assert resolver.resolve(NamedType('Opt', package='opt')).type_name == 'opt.Opt'
    assert resolver.resolve(PointerType(NamedType('Opt', package='opt'))).type_name == 'opt.Opt'


def test_alias_references_expand_the_aliased_struct():
    resolver, expanded = make_resolver()
    inner = TypeDeclaration('Inner', StructType([Field(['Name'], PrimitiveType('string'))]), is_alias=True)
    assert resolver.resolve(NamedType('Inner', declaration=inner)).type_name == 'Inner'

    address = TypeDeclaration('Address', StructType([Field(['City'], PrimitiveType('string'))]))
    home = TypeDeclaration('Home', NamedType('Address', declaration=address), is_alias=True)
    resolved = resolver.resolve(NamedType('Home', declaration=home))
    assert resolved.type_name == 'Address'
    assert [m.name for m in resolved.nested_messages] == ['Address']
    assert expanded == ['Inner', 'Address']
    assert resolver.opaque_types == []


def test_alias_of_non_struct_passes_through():
    resolver, expanded = make_resolver()
    level = TypeDeclaration('Level', PrimitiveType('int'))
    alias = TypeDeclaration('Tier', NamedType('Level', declaration=level), is_alias=True)
    assert resolver.resolve(NamedType('Tier', declaration=alias)).type_name == 'Tier'
    assert expanded == []
    assert resolver.opaque_types == []
