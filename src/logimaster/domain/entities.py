from typing import Annotated, Any, ClassVar, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

# --- Storage keys ---
# Also the top-level keys of JSON backups; renaming one orphans old exports.
DRIVERS = "db_motoristas"
VEHICLES = "db_veiculos"
CLIENTS = "db_contratantes"
OPERATIONS = "db_operacoes"
COMPANY = "db_minha_empresa"
GENERAL_EXPENSES = "db_despesas_gerais"
HELPERS = "db_ajudantes"
ACTIVITIES = "db_atividades"

COLLECTION_KEYS: tuple[str, ...] = (
    DRIVERS,
    VEHICLES,
    CLIENTS,
    OPERATIONS,
    COMPANY,
    GENERAL_EXPENSES,
    HELPERS,
    ACTIVITIES,
)
LIST_COLLECTIONS: tuple[str, ...] = tuple(k for k in COLLECTION_KEYS if k != COMPANY)

RegistryKind = Literal["drivers", "vehicles", "clients", "helpers", "activities"]


# --- Coercion helpers ---


def to_number(value: Any) -> float:
    """Mirror `Number(x) || 0`: blanks, None, NaN and junk all become 0."""
    if value is None or isinstance(value, bool):
        return float(value or 0)
    text = str(value).strip()
    # Digit separators are Python-only syntax
    if "_" in text:
        return 0.0
    try:
        number = float(text or 0)
    except ValueError:
        return 0.0
    if number != number or number in (float("inf"), float("-inf")):
        return 0.0
    return number


def to_optional_id(value: Any) -> int | None:
    number = to_number(value)
    return int(number) if number else None


def to_text(value: Any) -> str:
    return "" if value is None else str(value)


Money = Annotated[float, BeforeValidator(to_number)]
OptionalId = Annotated[int | None, BeforeValidator(to_optional_id)]
Text = Annotated[str, BeforeValidator(to_text)]


class Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    KEY_FIELD: ClassVar[str] = "id"

    @property
    def record_id(self) -> str:
        return str(getattr(self, self.KEY_FIELD))

    def to_storage(self) -> dict[str, Any]:
        """Dump using the camelCase storage keys."""
        return self.model_dump(by_alias=True)


# --- Registry ---


class Driver(Record):
    id: int
    name: Text = Field(default="", alias="nome")
    document: Text = Field(default="", alias="documento")
    phone: Text = Field(default="", alias="telefone")
    license_number: Text = Field(default="", alias="cnh")
    license_expiry: Text = Field(default="", alias="validadeCNH")
    license_category: Text = Field(default="", alias="categoriaCNH")
    has_course: bool = Field(default=False, alias="temCurso")
    course_description: Text = Field(default="", alias="cursoDescricao")
    pix: Text = ""


class Vehicle(Record):
    KEY_FIELD: ClassVar[str] = "plate"

    plate: Text = Field(alias="placa")
    model: Text = Field(default="", alias="modelo")
    year: Text = Field(default="", alias="ano")
    renavam: Text = ""
    chassis: Text = Field(default="", alias="chassi")


class Client(Record):
    KEY_FIELD: ClassVar[str] = "cnpj"

    cnpj: Text
    company_name: Text = Field(default="", alias="razaoSocial")
    phone: Text = Field(default="", alias="telefone")


class Helper(Record):
    id: int
    name: Text = Field(default="", alias="nome")
    document: Text = Field(default="", alias="documento")
    phone: Text = Field(default="", alias="telefone")
    address: Text = Field(default="", alias="endereco")
    pix: Text = ""


class Activity(Record):
    id: int
    name: Text = Field(default="", alias="nome")


# --- Operations ---


class HelperShift(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    daily_rate: Money = Field(default=0.0, alias="diaria")


class Operation(Record):
    id: int
    date: Text = Field(alias="data")
    driver_id: OptionalId = Field(default=None, alias="motoristaId")
    vehicle_plate: Text = Field(default="", alias="veiculoPlaca")
    client_cnpj: Text = Field(default="", alias="contratanteCNPJ")
    activity_id: OptionalId = Field(default=None, alias="atividadeId")
    revenue: Money = Field(default=0.0, alias="faturamento")
    advance: Money = Field(default=0.0, alias="adiantamento")
    commission: Money = Field(default=0.0, alias="comissao")
    fuel: Money = Field(default=0.0, alias="combustivel")
    fuel_price: Money = Field(default=0.0, alias="precoLitro")
    expenses: Money = Field(default=0.0, alias="despesas")
    km_driven: Money = Field(default=0.0, alias="kmRodado")
    helpers: list[HelperShift] = Field(default_factory=list, alias="ajudantes")


class GeneralExpense(Record):
    id: int
    date: Text = Field(alias="data")
    vehicle_plate: Text = Field(default="", alias="veiculoPlaca")
    description: Text = Field(default="", alias="descricao")
    amount: Money = Field(default=0.0, alias="valor")


class CompanyProfile(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    company_name: Text = Field(default="", alias="razaoSocial")
    cnpj: Text = ""
    phone: Text = Field(default="", alias="telefone")

    @property
    def is_empty(self) -> bool:
        return not self.company_name


COLLECTION_MODELS: dict[str, type[Record]] = {
    DRIVERS: Driver,
    VEHICLES: Vehicle,
    CLIENTS: Client,
    OPERATIONS: Operation,
    GENERAL_EXPENSES: GeneralExpense,
    HELPERS: Helper,
    ACTIVITIES: Activity,
}

REGISTRY_COLLECTIONS: dict[str, str] = {
    "drivers": DRIVERS,
    "vehicles": VEHICLES,
    "clients": CLIENTS,
    "helpers": HELPERS,
    "activities": ACTIVITIES,
}
