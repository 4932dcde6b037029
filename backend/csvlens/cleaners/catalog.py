"""
Metadata describing each transformation type and its parameters.

Served to clients so rule editors can be built without hard-coding the
parameter names and their defaults.
"""
from csvlens.cleaners.rules.number_format import DEFAULT_DECIMAL_PLACES, NUMBER_OPERATIONS
from csvlens.cleaners.rules.text_manipulation import TEXT_OPERATIONS, TEXT_POSITIONS
from csvlens.core.dates import DEFAULT_DATE_FORMAT, DEFAULT_TIMESTAMP_FORMAT, TIMESTAMP_FORMATS
from csvlens.schemas.cleaning import TransformationType

DATE_FORMATS = ["YYYY-MM-DD", "DD/MM/YYYY", "MM/DD/YYYY", "DD-MM-YYYY"]

AVAILABLE_TRANSFORMATIONS = {
    TransformationType.DATE_FORMAT.value: {
        "name": "Date Format",
        "description": "Reformat DD-MM-YYYY or DD/MM/YYYY dates using a YYYY/MM/DD template",
        "params": [
            {"name": "targetFormat", "type": "string", "required": False,
             "default": DEFAULT_DATE_FORMAT, "options": DATE_FORMATS},
        ]
    },
    TransformationType.TIMESTAMP_FORMAT.value: {
        "name": "Timestamp Format",
        "description": "Reformat Unix epochs and date-time text into a named format",
        "params": [
            {"name": "targetFormat", "type": "string", "required": False,
             "default": DEFAULT_TIMESTAMP_FORMAT, "options": TIMESTAMP_FORMATS},
        ]
    },
    TransformationType.NUMBER_FORMAT.value: {
        "name": "Number Format",
        "description": "Round numeric values to integers or a fixed number of decimals",
        "params": [
            {"name": "operation", "type": "string", "required": False,
             "default": "integer", "options": list(NUMBER_OPERATIONS)},
            {"name": "decimalPlaces", "type": "integer", "required": False,
             "default": DEFAULT_DECIMAL_PLACES},
        ]
    },
    TransformationType.REMOVE_DUPLICATES.value: {
        "name": "Remove Duplicates",
        "description": "Drop rows identical to an earlier row",
        "params": []
    },
    TransformationType.SUBSET_COLUMN.value: {
        "name": "Subset Column",
        "description": "Keep a substring of each text value",
        "params": [
            {"name": "startIndex", "type": "integer", "required": False, "default": 0},
            {"name": "length", "type": "integer", "required": False, "default": None},
        ]
    },
    TransformationType.REPLACE_NULLS.value: {
        "name": "Replace NULLs",
        "description": "Fill empty and 'null' values with a replacement",
        "params": [
            {"name": "replacementValue", "type": "string", "required": False, "default": ""},
        ]
    },
    TransformationType.COALESCE.value: {
        "name": "Coalesce",
        "description": "Fill empty values from fallback columns, then from a default",
        "params": [
            {"name": "fallbackColumns", "type": "columns", "required": False, "default": []},
            {"name": "defaultValue", "type": "string", "required": False, "default": ""},
        ]
    },
    TransformationType.TEXT_MANIPULATION.value: {
        "name": "Text Manipulation",
        "description": "Add, remove or replace literal text",
        "params": [
            {"name": "operation", "type": "string", "required": False,
             "default": "add", "options": list(TEXT_OPERATIONS)},
            {"name": "text", "type": "string", "required": False, "default": ""},
            {"name": "position", "type": "string", "required": False,
             "default": "end", "options": list(TEXT_POSITIONS)},
            {"name": "searchText", "type": "string", "required": False, "default": ""},
        ]
    },
}


def get_available_transformations() -> dict:
    """Get transformation types with their parameter metadata."""
    return AVAILABLE_TRANSFORMATIONS
