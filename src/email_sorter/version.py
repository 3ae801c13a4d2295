"""
Version constants for the classification engine.

Every ClassificationResult records the rule set version it was produced with,
so a reviewer can tell which configuration made a decision.
"""

# Engine version (scoring + selection algorithm)
ENGINE_VERSION = "1.0.0"

# Version of the built-in starter rule set (update when keywords or weights change)
STARTER_RULESET_VERSION = "starter-rules-1.0.0"


def get_version_info(ruleset_version: str = STARTER_RULESET_VERSION) -> dict:
    """
    Get version information for audit output.

    Args:
        ruleset_version: Version of the rule set in use

    Returns:
        Dict with engine and rule set versions
    """
    return {
        "engine_version": ENGINE_VERSION,
        "ruleset_version": ruleset_version,
    }
