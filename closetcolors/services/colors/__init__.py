"""
Closet Colors Engine

Color-space conversion, background estimation, garment region focusing,
dominant color extraction, harmony palettes, color naming and readability.
All functions are pure and take in-memory rasters.
"""

__version__ = "1.0.0"
