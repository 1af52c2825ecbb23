import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from logimaster.adapters.clock import SystemClock
from logimaster.components.backup import BackupService
from logimaster.components.company import CompanyService
from logimaster.components.dashboard import DashboardService
from logimaster.components.expenses import ExpenseService
from logimaster.components.operations import OperationService
from logimaster.components.registry import RegistryService
from logimaster.components.reports import ReportService
from logimaster.context import ServiceContext, resolve_db_path
from logimaster.rules.loader import load_rules, resolve_rules_path
from logimaster.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.rules_path = resolve_rules_path()
        self.data_dir = os.environ.get("LOGIMASTER_DATA_DIR")


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules(settings.rules_path)


# Databases already migrated in this process
_migrated: set[str] = set()

# Time adapter shared by all requests
_clock_instance: SystemClock | None = None


def get_clock() -> SystemClock:
    """Get clock singleton."""
    global _clock_instance
    if _clock_instance is None:
        _clock_instance = SystemClock()
    return _clock_instance


# --- Context ---
def get_context(
    settings: Settings = Depends(get_settings),
    rules: Rules = Depends(get_rules),
) -> ServiceContext:
    db_path = resolve_db_path(rules, settings.data_dir)
    ctx = ServiceContext.create(
        db_path, rules, clock=get_clock(), migrate=db_path not in _migrated
    )
    _migrated.add(db_path)
    return ctx


# --- Component Services ---
def get_registry_service(ctx: ServiceContext = Depends(get_context)) -> RegistryService:
    return ctx.registry_service


def get_operation_service(ctx: ServiceContext = Depends(get_context)) -> OperationService:
    return ctx.operation_service


def get_expense_service(ctx: ServiceContext = Depends(get_context)) -> ExpenseService:
    return ctx.expense_service


def get_company_service(ctx: ServiceContext = Depends(get_context)) -> CompanyService:
    return ctx.company_service


def get_dashboard_service(ctx: ServiceContext = Depends(get_context)) -> DashboardService:
    return ctx.dashboard_service


def get_report_service(ctx: ServiceContext = Depends(get_context)) -> ReportService:
    return ctx.report_service


def get_backup_service(ctx: ServiceContext = Depends(get_context)) -> BackupService:
    return ctx.backup_service
