"""Prompt assembly for the companion service.

Provides:
- Persona: the fixed identity injected into every prompt
- build_prompt: persona + profile + history + session mood + message -> prompt string
"""
