"""
Company component - the operator's own company profile, printed as the
payer on receipts and shown on the settings page.
"""

from __future__ import annotations

import logging
from typing import Any

from logimaster.domain.entities import CompanyProfile

from .ports import CompanyProfileRepoPort

logger = logging.getLogger(__name__)

EMPTY_SUMMARY = "NENHUM DADO."


class CompanyService:
    def __init__(self, repo: CompanyProfileRepoPort):
        self.repo = repo

    def get_profile(self) -> CompanyProfile:
        return self.repo.get()

    def save_profile(self, data: dict[str, Any] | CompanyProfile) -> CompanyProfile:
        profile = (
            data if isinstance(data, CompanyProfile) else CompanyProfile.model_validate(data)
        )
        profile = profile.model_copy(
            update={
                "company_name": profile.company_name.strip().upper(),
                "cnpj": profile.cnpj.strip(),
                "phone": profile.phone.strip(),
            }
        )
        self.repo.save(profile)
        logger.info("Saved company profile %s", profile.company_name)
        return profile

    def profile_summary(self) -> str:
        profile = self.get_profile()
        if profile.is_empty:
            return EMPTY_SUMMARY
        return f"{profile.company_name} | CNPJ: {profile.cnpj} | Tel: {profile.phone}"
