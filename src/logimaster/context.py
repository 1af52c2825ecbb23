from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from logimaster.adapters.clock import SystemClock
from logimaster.adapters.render.mpl_renderer import MatplotlibRenderer
from logimaster.adapters.sqlite.migrator import SQLiteMigrator
from logimaster.adapters.sqlite.repos import (
    SQLiteCompanyRepo,
    SQLiteRecordRepo,
    build_record_repos,
)
from logimaster.components.backup import BackupService
from logimaster.components.company import CompanyService
from logimaster.components.dashboard import DashboardService
from logimaster.components.expenses import ExpenseService
from logimaster.components.operations import OperationService
from logimaster.components.registry import RegistryService
from logimaster.components.reports import ReportService
from logimaster.ports.clock import ClockPort
from logimaster.ports.renderer import RendererPort
from logimaster.rules.models import Rules

logger = logging.getLogger(__name__)


def resolve_db_path(rules: Rules, data_dir: str | None = None) -> str:
    """Database file under $LOGIMASTER_DATA_DIR (or the configured default)."""
    storage = rules.storage
    base = data_dir or os.environ.get(storage.data_dir_env) or storage.default_data_dir
    return str(Path(base) / storage.db_filename)


@dataclass
class ServiceContext:
    registry_service: RegistryService
    operation_service: OperationService
    expense_service: ExpenseService
    company_service: CompanyService
    dashboard_service: DashboardService
    report_service: ReportService
    backup_service: BackupService
    repos: dict[str, SQLiteRecordRepo]
    company_repo: SQLiteCompanyRepo
    renderer: RendererPort
    rules: Rules
    db_path: str
    clock: ClockPort

    @classmethod
    def create(
        cls,
        db_path: str,
        rules: Rules,
        clock: ClockPort | None = None,
        migrate: bool = True,
    ) -> ServiceContext:
        if migrate:
            SQLiteMigrator(db_path).run_migrations()

        # Adapters
        repos = build_record_repos(db_path)
        company_repo = SQLiteCompanyRepo(db_path)
        renderer = MatplotlibRenderer()
        clock = clock or SystemClock()

        logger.debug("Service context ready for %s", db_path)
        return cls(
            registry_service=RegistryService(repos, clock, rules.validation),
            operation_service=OperationService(repos, clock, rules.validation),
            expense_service=ExpenseService(repos, clock),
            company_service=CompanyService(company_repo),
            dashboard_service=DashboardService(repos, renderer),
            report_service=ReportService(repos, company_repo),
            backup_service=BackupService(repos, company_repo),
            repos=repos,
            company_repo=company_repo,
            renderer=renderer,
            rules=rules,
            db_path=db_path,
            clock=clock,
        )
