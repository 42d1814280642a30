# Re-export common types
from .assignment import ATTENDANCE_STATUSES, CAPACITY_PER_CLASS, AssignmentMap, AttendanceMap
from .event import COLUMN_IDS, EventTask
from .instructor import Instructor, InstructorSlot
from .note import ClassNote
from .slot import ClassSlot, build_slot_id
from .student import (
    AttendanceRecord,
    ConditioningTest,
    PaymentRecord,
    PhysicalAssessment,
    SkillAchievement,
    Student,
)

__all__ = [
    "ATTENDANCE_STATUSES",
    "CAPACITY_PER_CLASS",
    "AssignmentMap",
    "AttendanceMap",
    "AttendanceRecord",
    "ClassNote",
    "ClassSlot",
    "COLUMN_IDS",
    "ConditioningTest",
    "EventTask",
    "Instructor",
    "InstructorSlot",
    "PaymentRecord",
    "PhysicalAssessment",
    "SkillAchievement",
    "Student",
    "build_slot_id",
]
