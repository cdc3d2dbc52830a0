"""
Configuration package.

All settings are module-level constants in ``studygenius.config.settings``.
"""
