from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

from .serialize import pick_fields


STUDENT_STATUSES = ("Ativo", "Inativo", "Trancado")
PAYMENT_STATUSES = ("Em dia", "Atrasado", "Pendente")
PLAN_TYPES = ("Mensal", "Trimestral", "Semestral")
PAYMENT_METHODS = ("Pix", "Cartão", "Dinheiro")
SKILL_STATUSES = ("not_started", "learning", "mastered", "fluid")
QUALITY_KEYS = ("control", "silence", "flow", "courage")


def empty_quality() -> Dict[str, bool]:
    return {k: False for k in QUALITY_KEYS}


@dataclass
class AttendanceRecord:
    date: str
    status: str
    slot_id: str
    note: str | None = None


@dataclass
class PaymentRecord:
    id: str
    date: str
    month_reference: str
    amount: float
    amount_paid: float
    description: str
    status: str  # paid, pending, overdue
    payment_method: str | None = None
    paid_at: str | None = None
    plan: str | None = None


@dataclass
class PhysicalAssessment:
    id: str
    date: str
    weight: float
    height: float
    waist_circumference: float


@dataclass
class ConditioningTest:
    id: str
    date: str
    push_ups: int
    pull_ups: int
    vertical_jump: float
    horizontal_jump: float
    sit_ups: int


@dataclass
class SkillAchievement:
    id: str
    skill_name: str
    category: str
    status: str = "not_started"
    quality: Dict[str, bool] = field(default_factory=empty_quality)
    updated_at: str | None = None

    @property
    def is_mastered(self) -> bool:
        return self.status in {"mastered", "fluid"}


@dataclass
class Student:
    id: str
    name: str
    birth_date: str = "2015-01-01"
    parent_name: str = ""
    parent_contact: str = ""
    emergency_phone: str = ""
    allergies: str = ""
    status: str = "Ativo"
    registration_status: str = "Incompleto"
    payment_status: str = "Pendente"
    main_class: str = ""
    is_trial: bool = False
    photo_url: str = ""
    enrolled_at: str = ""
    plan: str = "Mensal"
    monthly_fee: float = 150
    attendance_history: List[AttendanceRecord] = field(default_factory=list)
    payment_history: List[PaymentRecord] = field(default_factory=list)
    physical_assessments: List[PhysicalAssessment] = field(default_factory=list)
    conditioning_tests: List[ConditioningTest] = field(default_factory=list)
    skill_achievements: List[SkillAchievement] = field(default_factory=list)

    @property
    def is_active(self) -> bool:
        return self.status == "Ativo"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Student":
        values = pick_fields(cls, data)
        values["attendance_history"] = [
            AttendanceRecord(**pick_fields(AttendanceRecord, r)) for r in data.get("attendance_history", [])
        ]
        values["payment_history"] = [
            PaymentRecord(**pick_fields(PaymentRecord, r)) for r in data.get("payment_history", [])
        ]
        values["physical_assessments"] = [
            PhysicalAssessment(**pick_fields(PhysicalAssessment, r)) for r in data.get("physical_assessments", [])
        ]
        values["conditioning_tests"] = [
            ConditioningTest(**pick_fields(ConditioningTest, r)) for r in data.get("conditioning_tests", [])
        ]
        values["skill_achievements"] = [
            SkillAchievement(**pick_fields(SkillAchievement, r)) for r in data.get("skill_achievements", [])
        ]
        return cls(**values)
