from .settings import AppConfig

__all__ = ['AppConfig']
