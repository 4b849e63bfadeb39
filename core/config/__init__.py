"""
설정 패키지
"""

from core.config.loader import Settings, SecretsLoadError, get_settings, load_secrets

__all__ = ["Settings", "SecretsLoadError", "get_settings", "load_secrets"]
