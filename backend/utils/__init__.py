"""
/**
 * @file backend/utils/__init__.py
 * @description 工具函数导出。
 */
"""

from .validators import is_blank, is_valid_langpair, is_valid_url

__all__ = ["is_blank", "is_valid_langpair", "is_valid_url"]
