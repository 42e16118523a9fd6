"""Network and child-process helpers."""
