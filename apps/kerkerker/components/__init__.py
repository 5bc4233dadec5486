"""
Page components
Each component package provides a blueprint, a service and an init_<name>(app) hook.
"""
