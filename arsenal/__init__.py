"""
Arsenal aggregation: JSON item arrays in, ACE arsenal SQF scripts out.
"""

from arsenal.dedupe import (
    count_occurrences,
    find_duplicates,
    remove_duplicates,
    sort_case_insensitive,
    normalize_items,
)
from arsenal.loader import (
    InvalidArrayError,
    load_json_array,
    load_and_combine_data,
    load_all_units_data,
    list_unit_dirs,
    get_json_files_under,
)
from arsenal.sqf import render_init_box, render_exec_box, write_arsenal_scripts
from arsenal.normalize import NormalizeResult, NormalizeStats, process_json_file, normalize_data_dir
from arsenal.loadouts import LoadoutFile, get_all_unit_loadout_files, generate_loadouts

__all__ = [
    "count_occurrences",
    "find_duplicates",
    "remove_duplicates",
    "sort_case_insensitive",
    "normalize_items",
    "InvalidArrayError",
    "load_json_array",
    "load_and_combine_data",
    "load_all_units_data",
    "list_unit_dirs",
    "get_json_files_under",
    "render_init_box",
    "render_exec_box",
    "write_arsenal_scripts",
    "NormalizeResult",
    "NormalizeStats",
    "process_json_file",
    "normalize_data_dir",
    "LoadoutFile",
    "get_all_unit_loadout_files",
    "generate_loadouts",
]
