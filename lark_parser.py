from lark import Lark


# Grammar for the subset of Go needed to describe struct types.
# Function, method, var and const declarations are parsed only far enough to skip them.
grammar = r"""
    start: _SEP* (_item (_SEP+ _item)*)? _SEP*

    _item: package_clause
         | import_decl
         | type_decl
         | func_decl
         | value_decl

    package_clause: "package" NAME

    import_decl: "import" (import_spec | "(" _SEP* (import_spec (_SEP+ import_spec)*)? _SEP* ")")
    import_spec: [NAME] STRING

    type_decl: "type" (type_spec | "(" _SEP* (type_spec (_SEP+ type_spec)*)? _SEP* ")")
    type_spec: NAME [type_params] type_expr           -> type_def
             | NAME [type_params] "=" type_expr       -> type_alias

    type_params: "[" _SEP* type_param ("," _SEP* type_param)* ","? _SEP* "]"
    type_param: NAME ("," _SEP* NAME)* type_constraint
    type_constraint: constraint_term ("|" constraint_term)*
    constraint_term: TILDE? type_expr

    // Declarations without type information: bodies are matched by balanced brackets only
    func_decl: "func" _code_item+
    value_decl: ("var" | "const") (value_spec | "(" _SEP* (value_spec (_SEP+ value_spec)*)? _SEP* ")")
    value_spec: _CODE _code_item*
    _code_item: _CODE | _paren_group | _brace_group | STRING | RAW_STRING | CHAR
    _paren_group: "(" (_code_item | _SEP)* ")"
    _brace_group: "{" (_BODY | STRING | RAW_STRING | CHAR | _brace_group)* "}"

    ?type_expr: type_name
              | qualified_type
              | generic_type
              | pointer_type
              | slice_type
              | array_type
              | map_type
              | struct_type
              | interface_type
              | func_type
              | chan_type
              | "(" type_expr ")"

    type_name: NAME
    qualified_type: NAME "." NAME
    generic_type: (type_name | qualified_type) "[" type_expr ("," type_expr)* ","? "]"
    pointer_type: "*" type_expr
    slice_type: "[" "]" type_expr
    array_type: "[" array_length "]" type_expr
    array_length: INT | NAME | ELLIPSIS
    map_type: "map" "[" type_expr "]" type_expr
    func_type: "func" _paren_group _func_result?
    _func_result: _paren_group | type_expr
    chan_type: ("chan" | "chan" "<-" | "<-" "chan") type_expr

    struct_type: "struct" "{" _SEP* (field_decl (_SEP+ field_decl)*)? _SEP* "}"
    field_decl: NAME ("," _SEP* NAME)* type_expr [tag]   -> named_field
              | embedded_type [tag]                      -> embedded_field
    ?embedded_type: type_name
                  | qualified_type
                  | generic_type
                  | pointer_embedded
    pointer_embedded: "*" (type_name | qualified_type | generic_type)
    tag: RAW_STRING | STRING

    interface_type: "interface" "{" _SEP* (interface_elem (_SEP+ interface_elem)*)? _SEP* "}"
    interface_elem: method_spec | type_constraint
    method_spec: NAME PARAMS (type_expr | PARAMS)?

    NAME: /(?!(?:break|case|chan|const|continue|default|defer|else|fallthrough|for|func|go|goto|if|import|interface|map|package|range|return|select|struct|switch|type|var)\b)[^\W\d]\w*/
    INT: /0[xX][0-9a-fA-F_]+|[0-9][0-9_]*/
    ELLIPSIS: "..."
    TILDE: "~"
    PARAMS: /\([^()]*\)/
    STRING: /"(\\.|[^"\\\n])*"/
    RAW_STRING: /`[^`]*`/
    CHAR: /'(\\.|[^'\\\n])*'/

    // Code on one line up to a bracket, quote, comment or separator
    _CODE: /(?:[^{}()"'`\/\n;]|\/(?![\/*]))+/
    // Code inside braces; newlines and separators included
    _BODY: /(?:[^{}"'`\/]|\/(?![\/*]))+/

    _SEP: /\r?\n|;/
    LINE_COMMENT: /\/\/[^\n]*/
    BLOCK_COMMENT: /\/\*[\s\S]*?\*\//
    WS_INLINE: /[ \t\f]+/
    %ignore WS_INLINE
    %ignore LINE_COMMENT
    %ignore BLOCK_COMMENT
"""

parser = Lark(
    grammar,
    start='start',
    propagate_positions=True
)


def parse_go_source(text):
    """Parse Go source text; tree nodes carry their position in `meta`."""
    return parser.parse(text)
