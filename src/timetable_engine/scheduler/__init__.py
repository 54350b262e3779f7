"""Weekly timetable generation for one department and semester.

This package places the weekly sessions of a department's courses onto a
day x time-slot grid, assigning an eligible instructor and a suitable room to
each session. Placement is greedy with bounded backtracking, followed by a
hill-climbing local search and a fitness/conflict evaluation.

Main classes:
- TimetableGenerator: Runs the full pipeline on a DomainSnapshot
- AssignmentEngine: Slot search, instructor/room matching and backtracking
- LocalSearchOptimizer: Time-slot swaps that raise the soft score
- SnapshotLoader: Loads courses, faculty and rooms from a data directory
- WorkloadUpdater: Writes finished-run workload back to a store

Usage:
    from timetable_engine.scheduler import SnapshotLoader, TimetableGenerator

    loader = SnapshotLoader("data")
    snapshot = loader.load("CSE", 3)
    result = TimetableGenerator(loader.build_config(seed=7)).generate(snapshot)
"""

from .algorithm import AssignmentEngine, Placement
from .analysis import ConstraintAnalysis, analyze_constraints
from .availability import AvailabilityTracker
from .config import CourseConfig, FacultyConfig, RoomConfig, SettingsConfig, SnapshotLoader
from .constants import ALGORITHM_NAME, SOFT_CONSTRAINT_WEIGHTS, TIME_SLOTS, WORKING_DAYS
from .excel_generator import TimetableExcelGenerator
from .exporter import load_result_json, load_schedule
from .fitness import (
    FitnessEvaluator,
    calculate_fitness_score,
    count_hard_conflicts,
    entry_score,
    find_hard_conflicts,
)
from .instructors import InstructorPool
from .models import (
    Course,
    CourseType,
    Day,
    Dimension,
    DomainSnapshot,
    Faculty,
    GenerationResult,
    Room,
    RoomType,
    ScheduleEntry,
    SchedulingConfig,
    Session,
    SessionType,
    SoftConstraintWeights,
    TimeSlot,
    UnplacedSession,
    UnscheduledReason,
)
from .optimizer import LocalSearchOptimizer
from .planner import plan_sessions, planned_hours
from .rooms import RoomManager
from .scheduler import TimetableGenerator, generate
from .state import ScheduleState
from .utils import sort_courses_by_priority
from .workload import (
    InMemoryWorkloadStore,
    JsonWorkloadStore,
    WorkloadStatus,
    WorkloadStore,
    WorkloadSummary,
    WorkloadUpdater,
    aggregate_faculty_hours,
    summarize_workload,
    workload_status,
)

__all__ = [
    # Main generator
    "TimetableGenerator",
    "generate",
    "AssignmentEngine",
    "Placement",
    "LocalSearchOptimizer",
    # Building blocks
    "AvailabilityTracker",
    "ScheduleState",
    "RoomManager",
    "InstructorPool",
    "plan_sessions",
    "planned_hours",
    "sort_courses_by_priority",
    # Evaluation
    "FitnessEvaluator",
    "calculate_fitness_score",
    "count_hard_conflicts",
    "entry_score",
    "find_hard_conflicts",
    "ConstraintAnalysis",
    "analyze_constraints",
    # Workload
    "WorkloadStore",
    "InMemoryWorkloadStore",
    "JsonWorkloadStore",
    "WorkloadUpdater",
    "WorkloadStatus",
    "WorkloadSummary",
    "aggregate_faculty_hours",
    "summarize_workload",
    "workload_status",
    # Configuration
    "SnapshotLoader",
    "CourseConfig",
    "FacultyConfig",
    "RoomConfig",
    "SettingsConfig",
    # Export
    "TimetableExcelGenerator",
    "load_result_json",
    "load_schedule",
    # Models
    "Course",
    "CourseType",
    "Day",
    "Dimension",
    "DomainSnapshot",
    "Faculty",
    "GenerationResult",
    "Room",
    "RoomType",
    "ScheduleEntry",
    "SchedulingConfig",
    "Session",
    "SessionType",
    "SoftConstraintWeights",
    "TimeSlot",
    "UnplacedSession",
    "UnscheduledReason",
    # Constants
    "ALGORITHM_NAME",
    "SOFT_CONSTRAINT_WEIGHTS",
    "TIME_SLOTS",
    "WORKING_DAYS",
]
