"""
Activity logs module - Best-effort audit trail.
"""
