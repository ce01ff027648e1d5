"""
Configuration constants for arsenal aggregation and SQF generation.

Defines output naming, SQF templates, and the JSON layout of the data
directories. Directory defaults can be overridden through settings or the
``ARSENAL_*`` environment variables (see ``core.settings``).
"""

# ---------------------------------------------------------------------------
# Data layout
# ---------------------------------------------------------------------------
JSON_SUFFIX: str = ".json"

# Preset name for the combined output of every unit
ALL_UNITS_PRESET: str = "all"

# ---------------------------------------------------------------------------
# Output naming
# ---------------------------------------------------------------------------
INIT_SCRIPT_NAME: str = "init_arsenal_{prefix}.sqf"
EXEC_SCRIPT_NAME: str = "arsenal_{prefix}.sqf"
LOADOUTS_FILE_NAME: str = "loadouts.sqf"

# ---------------------------------------------------------------------------
# SQF templates
# ---------------------------------------------------------------------------
# Object init field: ``this`` is the arsenal box
INIT_BOX_TEMPLATE: str = """"Type: {prefix} | Last Updated: {date}";
[this, false] call ace_dragging_fnc_setDraggable;
[this, false] call ace_dragging_fnc_setCarryable;
[this,
  {items}
] call ace_arsenal_fnc_initBox;
"""

# execVM script: box passed as first parameter
EXEC_BOX_TEMPLATE: str = """"Type: {prefix} | Last Updated: {date}";
params ["_Arsenal"];
[_Arsenal, false] call ace_dragging_fnc_setDraggable;
[_Arsenal, false] call ace_dragging_fnc_setCarryable;
[_Arsenal,
  {items}
] call ace_arsenal_fnc_initBox;"""

LOADOUTS_HEADER_TEMPLATE: str = '"Last Updated: {date}";'
LOADOUT_LINE_TEMPLATE: str = '["{name}", {loadout}, true] call ace_arsenal_fnc_addDefaultLoadout;'
