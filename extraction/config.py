"""
Configuration constants for config-class extraction.

Defines the section keyword, the structural base classes that are never
reported, and the file extensions picked up during directory discovery.
"""

from typing import FrozenSet, Set

# Section whose classes are eligible for extraction
DEFAULT_SECTION_KEYWORD: str = "CfgWeapons"

# Structural base classes and section tokens never reported as items
DEFAULT_EXCLUDED_CLASSES: FrozenSet[str] = frozenset({
    "ItemCore",
    "InventoryItem_Base_F",
    "HeadgearItem",
    "CfgWeapons",
    "CfgPatches",
    "ItemInfo",
    "XtdGearInfo",
})

# Identifier token grammar of the config dialect
IDENTIFIER_PATTERN: str = r"[A-Za-z0-9_]+"

# Enabling property: own-level ``scope = 2;``
ENABLING_PROPERTY: str = "scope"
ENABLING_VALUE: str = "2"

# Config file extensions
CONFIG_EXTENSIONS: Set[str] = {
    ".cpp",
    ".hpp",
}

# Directories never descended into during discovery
SKIPPED_DIRECTORIES: Set[str] = {
    "build",
    "node_modules",
    "venv",
    "__pycache__",
    "dist",
    "output",
}
