"""
Aura Twin - Compatibility Core

This package implements the deterministic (non-LLM) matching heuristics
behind Aura Twin, a dating app where every user is represented by an AI
"twin" persona.

Key Design Decisions:
- Scoring is a fixed additive heuristic over list overlaps, no model
- Every output is assembled from string templates, never generated text
- All core functions are pure: same twins in, same result out
- Profiles are immutable snapshots; callers own every returned object
"""

__version__ = "1.0.0"
