"""
Configuration for type definition resolution.

Defines the scalar table used by the primitive classifier and the
resolution settings.
"""

# Root reference meaning "no body / no response"
NO_TYPE_SENTINEL = "nil"

# Go scalar -> (swagger type, swagger format)
PRIMITIVE_TYPES = {
    "bool": ("boolean", ""),
    "string": ("string", ""),
    "int": ("integer", "int32"),
    "int8": ("integer", "int32"),
    "int16": ("integer", "int32"),
    "int32": ("integer", "int32"),
    "uint": ("integer", "int32"),
    "uint8": ("integer", "int32"),
    "uint16": ("integer", "int32"),
    "uint32": ("integer", "int32"),
    "byte": ("integer", "int32"),
    "rune": ("integer", "int32"),
    "int64": ("integer", "int64"),
    "uint64": ("integer", "int64"),
    "float32": ("number", "float"),
    "float64": ("number", "double"),
    "[]byte": ("string", "byte"),
    "time.Time": ("string", "date-time"),
    "time.Duration": ("integer", "int64"),
    "interface{}": ("object", ""),
    "any": ("object", ""),
    "json.RawMessage": ("object", ""),
}

# Scalar kinds that may back an enum type (type Status int / type Color string)
ENUM_BACKING_KINDS = {"boolean", "string", "integer", "number"}

RESOLUTION_CONFIG = {
    "warn_on_enum_miss": False,  # Log when an enum candidate has no constants
}
