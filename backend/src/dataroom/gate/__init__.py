"""Gate feature module - session tokens, sessions registry and gate endpoints"""
