"""
Orchestration Layer - Workflow Coordination

This layer coordinates the pipeline run.
- Pure workflow coordination
- No business logic
- Composes extract, transform, and load operations
"""
