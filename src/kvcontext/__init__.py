from .config import AppConfig, ConfigError, ExportSettings, load_config
from .domain import (
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
    ContextError,
    ExportError,
    ExportFormat,
    FormatDisabledError,
    Map,
    Option,
    Seq,
    String,
    Unit,
    Value,
    ValueKind,
    to_value,
)
from .kernel import Context

__version__ = "0.1.0"

__all__ = [
    "AppConfig",
    "Bool",
    "Bytes",
    "Char",
    "ConfigError",
    "Context",
    "ContextError",
    "ExportError",
    "ExportFormat",
    "ExportSettings",
    "F32",
    "F64",
    "FormatDisabledError",
    "I8",
    "I16",
    "I32",
    "I64",
    "I128",
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
    "load_config",
    "to_value",
]
