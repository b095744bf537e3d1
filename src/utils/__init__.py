"""
Utility modules for TriageLens.

Cross-cutting concerns:
- LLM: Gemini-backed text generation capability
- Storage: SQLite persistence for feedback rows
"""
