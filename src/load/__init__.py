"""
Load Layer - Data Persistence

This layer handles all spreadsheet and file operations.
- Worksheet backends (Google Sheets, local Excel)
- Cell writes for image rows
- Local snapshot storage (Parquet, JSON)
"""
