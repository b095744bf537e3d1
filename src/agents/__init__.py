"""
Agent implementations for TriageLens.

Contains the modules that move feedback through the triage pipeline:
- Response Extractor
- Analysis Normalizer
- Triage Invoker
- Aggregation Engine
- Assistant Orchestrator
- CSV ingestion and export
"""
