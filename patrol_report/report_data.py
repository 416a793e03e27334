# patrol_report/report_data.py
from __future__ import annotations
from typing import Any, Dict, List, Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator

ENGINE_COUNT = 5
GAS_GENERATOR_COUNT = 3

LEAKING_PRODUCTS = ("MS", "HSD", "Ethanol", "Biodiesel", "LDO", "LSHSP")
RECEIPT_PRODUCTS = ("HSD", "MS")
UNLOADING_STATUSES = ("Not Started", "Ongoing", "Completed")

LeakingProduct = Literal["", "MS", "HSD", "Ethanol", "Biodiesel", "LDO", "LSHSP"]
ReceiptProduct = Literal["", "HSD", "MS"]
UnloadingStatus = Literal["", "Not Started", "Ongoing", "Completed"]


def to_wire_name(name: str) -> str:
    """guard_name -> guardName, power_33kv_on -> power33kvOn"""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_wire_name,
        populate_by_name=True,
        validate_assignment=True,
    )


class EngineStatus(_WireModel):
    id: int
    name: str
    is_up: bool = True


class GasGeneratorInfo(_WireModel):
    id: int
    name: str
    used: bool = False
    start_time: str = ""
    end_time: str = ""


def _default_engines() -> List[EngineStatus]:
    return [EngineStatus(id=i, name=f"Engine {i}") for i in range(1, ENGINE_COUNT + 1)]


def _default_generators() -> List[GasGeneratorInfo]:
    return [GasGeneratorInfo(id=i, name=f"Gas Gen {i}") for i in range(1, GAS_GENERATOR_COUNT + 1)]


class ReportData(_WireModel):
    """Everything collected for one patrol report session."""

    # Patrol guard
    guard_name: str = ""
    patrol_start_time: str = ""
    patrol_end_time: str = ""

    # Fire engines
    engines: List[EngineStatus] = Field(default_factory=_default_engines)
    fire_engine_remarks: str = ""

    # Water tanks (meters)
    tk13_level: str = ""
    tk29_level: str = ""

    # Hydrant & pumps
    hydrant_pressure: str = ""
    jockey_pump_runtime: str = ""  # minutes between runs
    jockey_warning_confirmed: bool = False

    # Leakage
    air_line_leak: bool = False
    air_line_leak_location: str = ""
    hydrant_line_leak: bool = False
    hydrant_line_leak_location: str = ""
    product_line_leak: bool = False
    leaking_product: LeakingProduct = ""
    product_line_leak_location: str = ""

    # Power
    power_33kv_on: bool = True
    gas_gen_running: bool = False
    gas_gen_changeover: bool = False
    gas_generators: List[GasGeneratorInfo] = Field(default_factory=_default_generators)

    # Product receipt
    product_receipt_active: bool = False
    product_receipt_tank: str = ""
    product_name: ReceiptProduct = ""

    # Rake operations
    rake_placed: bool = False
    rake_placement_time: str = ""
    rake_unloading_status: UnloadingStatus = ""
    rake_removed: bool = False
    rake_removal_time: str = ""

    # Office
    office_ac_lighting_on: bool = False

    # CCTV
    all_cctv_running: bool = True
    cctv_down_count: str = "0"
    cctv_down_remarks: str = ""

    # Systems & security
    cbacs_running: bool = True
    cbacs_remarks: str = ""
    watch_tower_used: bool = True
    watch_tower_observation: str = "Normal"
    night_vision_used: bool = True
    night_vision_observation: str = "Nothing suspicious"

    # Filled in on the outgoing payload only
    system_alerts: List[str] = Field(default_factory=list)

    @field_validator("engines")
    @classmethod
    def _five_engines(cls, v: List[EngineStatus]) -> List[EngineStatus]:
        if len(v) != ENGINE_COUNT:
            raise ValueError(f"expected {ENGINE_COUNT} engines, got {len(v)}")
        return v

    @field_validator("gas_generators")
    @classmethod
    def _three_generators(cls, v: List[GasGeneratorInfo]) -> List[GasGeneratorInfo]:
        if len(v) != GAS_GENERATOR_COUNT:
            raise ValueError(f"expected {GAS_GENERATOR_COUNT} gas generators, got {len(v)}")
        return v

    def update_engine(self, engine_id: int, is_up: bool) -> None:
        for engine in self.engines:
            if engine.id == engine_id:
                engine.is_up = is_up

    def update_gas_generator(self, gen_id: int, field: str, value: Any) -> None:
        """Set one field (used/start_time/end_time) on the generator with this id"""
        if field not in ("used", "start_time", "end_time"):
            raise ValueError(f"Unknown gas generator field: {field}")
        for gen in self.gas_generators:
            if gen.id == gen_id:
                setattr(gen, field, value)

    def set_rake_unloading_status(self, status: UnloadingStatus) -> None:
        self.rake_unloading_status = status
        if status != "Completed":
            self.rake_removed = False

    def set_rake_removed(self, removed: bool) -> bool:
        """Removal can only be recorded once unloading is Completed.

        Returns whether the value was applied.
        """
        if removed and self.rake_unloading_status != "Completed":
            return False
        self.rake_removed = removed
        return True

    def to_payload(self) -> Dict[str, Any]:
        """Wire-format dict (camelCase keys) sent to the report generator"""
        return self.model_dump(mode="json", by_alias=True)
