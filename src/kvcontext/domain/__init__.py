from .errors import ContextError, ExportError, FormatDisabledError
from .formats import ExportFormat
from .value import (
    F32,
    F64,
    I8,
    I16,
    I32,
    I64,
    I128,
    U8,
    U16,
    U32,
    U64,
    U128,
    Bool,
    Bytes,
    Char,
    Float,
    Integer,
    Map,
    Option,
    Seq,
    String,
    Unit,
    Value,
    ValueKind,
    integer_bounds,
    to_value,
)

# Public domain exports keep imports explicit across layers.
__all__ = [
    "Bool",
    "Bytes",
    "Char",
    "ContextError",
    "ExportError",
    "ExportFormat",
    "F32",
    "F64",
    "Float",
    "FormatDisabledError",
    "I8",
    "I16",
    "I32",
    "I64",
    "I128",
    "Integer",
    "Map",
    "Option",
    "Seq",
    "String",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "Unit",
    "Value",
    "ValueKind",
    "integer_bounds",
    "to_value",
]
