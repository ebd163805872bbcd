"""
Shared helpers for the protobuf generator: Go to protobuf scalar mapping and field naming.
"""

# --- Type Mapping ---
GO_TO_PROTO_TYPE = {
    'string': 'string',
    'int': 'int32',
    'int8': 'int32',
    'int16': 'int32',
    'int32': 'int32',
    'rune': 'int32',
    'uint': 'uint32',
    'uint8': 'uint32',
    'uint16': 'uint32',
    'uint32': 'uint32',
    'byte': 'uint32',
    'int64': 'int64',
    'uint64': 'uint64',
    'float32': 'double',
    'float64': 'double',
    'bool': 'bool',
    'time.Time': 'int64',
}


def convert_type_to_protobuf(go_type: str) -> str:
    """Map a Go type name to a protobuf scalar; unknown names pass through unchanged."""
    return GO_TO_PROTO_TYPE.get(go_type, go_type)


def is_scalar_go_type(go_type: str) -> bool:
    return go_type in GO_TO_PROTO_TYPE


# --- Name Conversion ---
def convert_to_snake_case(text: str) -> str:
    # Consecutive capitals stay together: HTTPStatus -> httpstatus
    result = []
    for i, char in enumerate(text):
        if char.isupper():
            if i > 0 and text[i - 1].islower():
                result.append('_')
            result.append(char.lower())
        else:
            result.append(char)
    return ''.join(result)
