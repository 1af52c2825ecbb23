"""
Company component - own company profile.
"""

from .component import EMPTY_SUMMARY, CompanyService

__all__ = ["CompanyService", "EMPTY_SUMMARY"]
