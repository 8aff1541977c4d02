"""Collage layout workflow package.

The placement engine itself lives in ``placement_engine``; this package
wraps it in a LangGraph pass:

- workflow state definitions (`state.py`)
- graph node logic (`nodes/`)
- utility helpers (`utils/`)
- trigger handling (`workflow.py`)
"""

__all__ = [
    "state",
    "graph",
    "workflow",
]
