"""Memory layer for the companion service.

Provides:
- fact_extractor: regex extraction of personal facts from a user message
- mood: keyword-based mood detection
- ProfileStore / SessionStore / HistoryStore: keyed per-user and per-session state
"""
