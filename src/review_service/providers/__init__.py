"""
AI Provider Registry

Maps provider names to connection settings loaded at startup.
"""

from .registry import ProviderRegistry

__all__ = ['ProviderRegistry']
