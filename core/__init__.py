"""Core (UI-agnostic) dashboard logic.

This package contains:
- webhook payload normalization (untyped JSON -> ChartRecord)
- the upstream webhook client used by the API proxies
- chart helpers (records -> Altair chart, totals)
- page state and controller actions
"""
