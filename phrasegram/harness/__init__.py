from .core import solve, solve_report, solve_batch, SolveReport
from .io import (
    write_csv, write_manifest, result_to_dict, result_from_dict, results_to_json, results_from_json,
    report_to_dict,
)

__all__ = [
    "solve", "solve_report", "solve_batch", "SolveReport",
    "write_csv", "write_manifest", "result_to_dict", "result_from_dict",
    "results_to_json", "results_from_json", "report_to_dict",
]
