from pydantic import BaseModel, Field


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class StorageRules(BaseModel):
    data_dir_env: str = "LOGIMASTER_DATA_DIR"
    default_data_dir: str = "./data"
    db_filename: str = "logimaster.db"


class ValidationRules(BaseModel):
    uppercase_names: bool = True
    # Old (ABC-1234) and Mercosul (ABC1D23) plates
    plate_pattern: str = r"^[A-Z]{3}-?[0-9][A-Z0-9][0-9]{2}$"
    cnpj_digits: list[int] = Field(default_factory=lambda: [11, 14])
    require_activity: bool = False


class BackupsRules(BaseModel):
    include: list[str]
    backup_dir_name: str
    retention_count: int
    export_prefix: str = "backup_logimaster_"


class ReportsRules(BaseModel):
    billing_title: str = "RELATÓRIO DE COBRANÇA"
    receipt_title: str = "RECIBO DE PAGAMENTO"
    pdf_filename: str = "relatorio.pdf"


class OpsRules(BaseModel):
    required_env: list[str]
    backups: BackupsRules


class Rules(BaseModel):
    project: ProjectRules
    storage: StorageRules = Field(default_factory=StorageRules)
    validation: ValidationRules = Field(default_factory=ValidationRules)
    reports: ReportsRules = Field(default_factory=ReportsRules)
    ops: OpsRules
