"""Lark grammar for the DAL schema language.

Rule names are the grammar categories the tree builder checks for
(`decl_table`, `column`, `modifier_ref`, ...). Keywords are anonymous
terminals and are filtered out of the tree; every node keeps its byte
offsets because the parser is built with `propagate_positions=True`.

Example:

    enum Rating [exists] {
        Explicit
        General
    }

    table Post {
        id      serial   [primary key]
        author  text     [ref: User.id (delete: cascade)]
        rating  Rating!
        created dateTime [default: now()]
    }
"""

# NOTE: Kept as a single grammar string; the builder depends on these rule names.

DAL_GRAMMAR = r"""
// --------------------
// Entry point
// --------------------
schema: _top_item*
_top_item: decl_enum
         | decl_table
         | comment

// --------------------
// Declarations
// --------------------
decl_enum: "enum" ident exists? "{" _enum_member* "}"
_enum_member: variant
            | comment
variant: IDENT

decl_table: "table" ident exists? "{" _table_member* "}"
_table_member: column
             | comment

exists: "[" "exists" "]"

// --------------------
// Columns
// --------------------
column: ident column_type null? modifiers?
column_type: COLUMN_TYPE
null: "!"

// Either `[a] [b]` or `[a, b]`; both flatten into one `modifiers` node.
modifiers: ("[" _modifier ("," _modifier)* "]")+
_modifier: modifier_default
         | modifier_primary
         | modifier_unique
         | modifier_ref

modifier_default: "default" ":" modifier_default_value
modifier_default_value: DEFAULT_VALUE
modifier_primary: "primary" "key"
modifier_unique: "unique"

modifier_ref: "ref" ":" ident "." ident ref_action?
ref_action: "(" _ref_action_item ("," _ref_action_item)* ")"
_ref_action_item: ref_action_delete
                | ref_action_update
ref_action_delete: "delete" ":" action
ref_action_update: "update" ":" action
// Validity of the phrase is checked by Action.parse, not here.
action: ACTION

ident: IDENT
comment: COMMENT

// --------------------
// Terminals
// --------------------
IDENT: /[A-Za-z_][A-Za-z0-9_]*/
COLUMN_TYPE: /[A-Za-z_][A-Za-z0-9_]*(?:\([^)]*\))?/
DEFAULT_VALUE: /'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|[^\s,\[\]]+/
ACTION: /[A-Za-z_]+(?: [A-Za-z_]+)*/
COMMENT: /\/\/[^\n]*/

%import common.WS
%ignore WS
"""
