"""
Transformation Layer - Pure, Deterministic Functions

This layer contains the sheet placement logic.
- Pure functions (input → output)
- No I/O operations
- Unit testable
"""
