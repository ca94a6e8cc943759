"""
Rendering of query results.

Results are printed as a tab-separated table: the column names once,
then one line per row.  Nothing (not even the header) is printed for
an empty result.  ``result_as_strings`` returns the same cells as a
list of lists for callers that want the values instead of output.
"""

from typing import Any, Callable, List

from mechanic_shop.app.core.db import QueryResult


def format_value(value: Any) -> str:
    return "" if value is None else str(value)


def result_as_strings(result: QueryResult) -> List[List[str]]:
    """Return every row of ``result`` as a list of string values."""
    return [[format_value(value) for value in row] for row in result.rows]


def print_result(result: QueryResult, write: Callable[[str], None] = print) -> int:
    """Print ``result`` through ``write`` and return the number of rows."""
    if result.rows:
        write("\t".join(result.columns))
    for row in result_as_strings(result):
        write("\t".join(row))
    return len(result.rows)
