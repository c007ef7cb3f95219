"""Data loading module for twin profile pools."""

from .loaders import load_profiles, load_profile_records

__all__ = ["load_profiles", "load_profile_records"]
