"""Constants for timetable generation.

These are the default values used to build a ``SchedulingConfig``. The engine
never reads them directly; everything flows through the config object so that
several institutions can run side by side with different grids and weights.
"""

# Time slots definition
# Each slot is one hour; slot 5 is the lunch break and is never assigned
TIME_SLOTS = [
    {"id": 1, "start": "08:00", "end": "09:00", "is_break": False},
    {"id": 2, "start": "09:00", "end": "10:00", "is_break": False},
    {"id": 3, "start": "10:00", "end": "11:00", "is_break": False},
    {"id": 4, "start": "11:00", "end": "12:00", "is_break": False},
    {"id": 5, "start": "12:00", "end": "13:00", "is_break": True},
    {"id": 6, "start": "13:00", "end": "14:00", "is_break": False},
    {"id": 7, "start": "14:00", "end": "15:00", "is_break": False},
    {"id": 8, "start": "15:00", "end": "16:00", "is_break": False},
    {"id": 9, "start": "16:00", "end": "17:00", "is_break": False},
    {"id": 10, "start": "17:00", "end": "18:00", "is_break": False},
]

WORKING_DAYS = ["monday", "tuesday", "wednesday", "thursday", "friday"]

# Hard limits
MAX_CONSECUTIVE_HOURS = 3
MAX_FACULTY_HOURS_PER_WEEK = 20
MAX_FACULTY_HOURS_PER_DAY = 5

# Course defaults
DEFAULT_BATCH_SIZE = 60
DEFAULT_LAB_DURATION = 2
DEFAULT_HOURS_PER_WEEK = 3

# A room qualifies when capacity >= ROOM_CAPACITY_RATIO * batch size
ROOM_CAPACITY_RATIO = 0.8

# Search bounds
BACKTRACK_ATTEMPTS = 10
LOCAL_SEARCH_MAX_PASSES = 200

# Faculty at or above this share of their weekly cap are flagged by analysis
NEAR_CAPACITY_RATIO = 0.9

# Workload summary status: HIGH at or above this share of the weekly cap
HIGH_WORKLOAD_RATIO = 0.8

ALGORITHM_NAME = "CSP_BACKTRACK_LOCAL_SEARCH"

# Soft constraint weights
SOFT_CONSTRAINT_WEIGHTS = {
    # Slot search scoring
    "base_score": 100,
    "day_spread_penalty": 15,
    "morning_lecture_bonus": 10,
    "morning_slot_max": 4,
    "afternoon_practical_bonus": 15,
    "afternoon_slot_min": 6,
    "late_lecture_penalty": 20,
    "late_lecture_slot_min": 8,
    "consecutive_penalty": 50,
    # Per-entry score used by local search and fitness
    "entry_base_score": 50,
    "very_late_penalty": 25,
    "very_late_slot_min": 9,
    # Fitness workload balance term
    "workload_weight": 10,
    "workload_stddev_factor": 2,
    "fitness_offset": 1000,
}
