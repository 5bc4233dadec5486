"""
kerkerker - video streaming front-end with danmaku search and an admin console
"""
__version__ = '0.1.0'
