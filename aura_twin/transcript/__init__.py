"""Transcript module for scripted twin-to-twin conversations."""

from .simulator import simulate_transcript, simulate_twin_chat, SCRIPT_LENGTH

__all__ = ["simulate_transcript", "simulate_twin_chat", "SCRIPT_LENGTH"]
