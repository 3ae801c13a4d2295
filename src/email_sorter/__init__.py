"""
Explainable rule-based email triage.

Classifies message records (sender, subject, body preview) into exactly one
category and reports the full per-category score breakdown plus the reasons
behind the decision.
"""

from .version import ENGINE_VERSION

__version__ = ENGINE_VERSION

__all__ = ["__version__"]
