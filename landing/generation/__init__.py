"""
Page generation pipeline.

Modules:
    generator - LandingPageGenerator: load products, render and write every artifact
"""

from .generator import GenerationResult, LandingPageGenerator

__all__ = [
    'LandingPageGenerator',
    'GenerationResult',
]
