"""
PipeRoute Serialization Module

JSON documents for optimization requests and pipe solutions.
"""

from .solution_json import (
    FORMAT_VERSION,
    solution_to_dict,
    solution_from_dict,
    request_from_dict,
    request_to_dict,
    export_solution,
    load_request,
)

__all__ = [
    'FORMAT_VERSION', 'solution_to_dict', 'solution_from_dict',
    'request_from_dict', 'request_to_dict', 'export_solution', 'load_request'
]
