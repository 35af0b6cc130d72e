"""
Documents module - Uploads, review and completeness checks.
"""
