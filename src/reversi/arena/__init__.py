"""
Arena module for running tournaments between difficulty tiers.
"""
from .arena import Arena, TierPlayer, ELORatingSystem

__all__ = ['Arena', 'TierPlayer', 'ELORatingSystem']
