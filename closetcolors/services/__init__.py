"""
Closet Colors Services

Imaging adapter, analysis cache and fingerprinting around the pure color engine.
"""
