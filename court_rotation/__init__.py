"""
court_rotation package: rotation model, timeline arithmetic, fatigue / minutes / lineup
analytics, staggered rotation generator, IO, validation and PDF export.
"""
__all__ = [
    "constants",
    "models",
    "errors",
    "timeline",
    "rotation",
    "fatigue",
    "minutes",
    "ratings",
    "lineups",
    "optimizer",
    "analytics",
    "validation",
    "io",
    "config",
    "export_pdf",
    "rotation_logging",
]
