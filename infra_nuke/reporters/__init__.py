"""
Report Generators
=================

Output formatters for nuke and inspect runs.

Available Reporters
-------------------
CLIReporter
    Rich terminal output with candidate and attempt tables.
CSVReporter
    CSV export of the audit report (or the candidates of a dry run).
JSONReporter
    JSON export of the whole run.

Example
-------
>>> from infra_nuke.reporters import CLIReporter, JSONReporter
>>>
>>> CLIReporter().report(result)
>>> JSONReporter(output_path="nuke.json").report(result)
"""

from infra_nuke.reporters.cli_reporter import CLIReporter
from infra_nuke.reporters.csv_reporter import CSVReporter
from infra_nuke.reporters.json_reporter import JSONReporter

__all__ = [
    "CLIReporter",
    "CSVReporter",
    "JSONReporter",
]
