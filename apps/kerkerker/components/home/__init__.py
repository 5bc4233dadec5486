"""
Home Component
Site footer with the legal disclaimer
"""
from .routes import home_bp, init_home

__all__ = ['home_bp', 'init_home']
