# -*- coding: utf-8 -*-
"""Training programs: seed day workouts and exercises from the built-in tables.

Every week of every track gets one workout per weekday (Sunday is a rest day),
chosen from the table for the track's type. Exercises are then laid out in four
sections (warmup, main, finisher, cooldown) with reps and rest depending on the
week's phase. Seeding only fills gaps, so running it twice creates nothing new.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from ..app_db import db_conn
from ..config import settings
from .storage import DAYS_OF_WEEK, insert_day_workout, insert_exercise

logger = logging.getLogger(__name__)

Exercise = Dict[str, str]

# day -> (workout name, description, rest day)
FAT_LOSS_WORKOUTS: Dict[str, Tuple[str, str, bool]] = {
    "monday": ("Metabolic Push", "High-rep push movements with cardio bursts", False),
    "tuesday": ("Cardio Pull", "Back and biceps with conditioning intervals", False),
    "wednesday": ("Leg Burner", "Lower body circuit for maximum calorie burn", False),
    "thursday": ("Upper Body HIIT", "Upper body movements with HIIT protocol", False),
    "friday": ("Lower Body Blast", "Leg-focused conditioning", False),
    "saturday": ("Full Body Inferno", "Total body circuit - no rest for the wicked", False),
    "sunday": ("Active Recovery", "Light movement and stretching", True),
}

MUSCLE_WORKOUTS: Dict[str, Tuple[str, str, bool]] = {
    "monday": ("Cell Block Chest", "Push day - chest, shoulders, triceps", False),
    "tuesday": ("Yard Back", "Pull day - back and biceps", False),
    "wednesday": ("Prison Legs", "Leg day - quads, hams, glutes", False),
    "thursday": ("Iron Shoulders", "Shoulder and arm focus", False),
    "friday": ("Power Day", "Compound movements for strength", False),
    "saturday": ("Pump Session", "High-volume accessory work", False),
    "sunday": ("Rest & Recover", "Complete rest - let the muscle grow", True),
}

RECOMP_WORKOUTS: Dict[str, Tuple[str, str, bool]] = {
    "monday": ("Strength Push", "Heavy push with metabolic finisher", False),
    "tuesday": ("Cardio Conditioning", "Pure conditioning and core", False),
    "wednesday": ("Strength Pull", "Heavy pull with explosive work", False),
    "thursday": ("HIIT Circuit", "Full body interval training", False),
    "friday": ("Strength Legs", "Lower body strength with conditioning", False),
    "saturday": ("Hybrid Burner", "Strength and cardio complex", False),
    "sunday": ("Active Recovery", "Mobility and light movement", True),
}

WORKOUTS_BY_TRACK_TYPE = {
    "fat_loss": FAT_LOSS_WORKOUTS,
    "muscle": MUSCLE_WORKOUTS,
    "recomp": RECOMP_WORKOUTS,
}

PHASE_VOLUME = {
    "foundation": ("15-20", "45-60 sec"),
    "build": ("10-15", "30-45 sec"),
}
PEAK_VOLUME = ("8-12 or AMRAP", "20-30 sec")


def _ex(name: str, sets: str, reps: str, rest: str, notes: str) -> Exercise:
    return {"name": name, "sets": sets, "reps": reps, "rest": rest, "notes": notes}


WARMUP: List[Exercise] = [
    _ex("Jumping Jacks", "1", "30 sec", "0", "Get the blood flowing"),
    _ex("Arm Circles", "1", "20 each direction", "0", "Loosen up shoulders"),
    _ex("Bodyweight Squats", "1", "15", "0", "Warm up the legs"),
    _ex("Push-up to Downward Dog", "1", "10", "30 sec", "Full body activation"),
]

COOLDOWN: List[Exercise] = [
    _ex("Standing Quad Stretch", "1", "30 sec each", "0", "Hold steady"),
    _ex("Shoulder Stretch", "1", "30 sec each", "0", "Arm across body"),
    _ex("Deep Breathing", "1", "10 breaths", "0", "Calm the nervous system"),
]


def track_type(track_name: str) -> str:
    name = (track_name or "").lower()
    if "fat" in name:
        return "fat_loss"
    if "muscle" in name:
        return "muscle"
    return "recomp"


def _has(day: str, *keywords: str) -> bool:
    return any(k in day for k in keywords)


def _fat_loss(day: str, reps: str, rest: str) -> Tuple[List[Exercise], List[Exercise]]:
    if _has(day, "push", "chest"):
        return [
            _ex("Burpees", "4", reps, rest, "Explosive! Full extension at top"),
            _ex("Push-ups", "4", reps, rest, "Chest to floor, full lockout"),
            _ex("Mountain Climbers", "3", "30 sec", "20 sec", "Fast pace, drive those knees"),
            _ex("Diamond Push-ups", "3", reps, rest, "Hands together, elbows tight"),
            _ex("Plank Shoulder Taps", "3", "20 total", rest, "Keep hips stable"),
        ], [_ex("Burpee Ladder", "1", "10-1 countdown", "0", "Start with 10, then 9, 8... no rest!")]
    if _has(day, "pull", "back"):
        return [
            _ex("Inverted Rows", "4", reps, rest, "Use a sturdy bar or table"),
            _ex("Superman Holds", "3", "30 sec", rest, "Squeeze glutes and back"),
            _ex("Towel Rows", "3", reps, rest, "Wrap towel around pole, pull hard"),
            _ex("Reverse Snow Angels", "3", "15", rest, "Face down, arms sweep wide"),
            _ex("High Knees", "3", "30 sec", "15 sec", "Keep the pace up!"),
        ], [_ex("Row Hold + High Knees", "3", "20 sec hold + 20 knees", "30 sec", "Superset - no break between")]
    if _has(day, "leg"):
        return [
            _ex("Jump Squats", "4", reps, rest, "Explode up, soft landing"),
            _ex("Reverse Lunges", "3", "12 each leg", rest, "Step back, knee kisses floor"),
            _ex("Prisoner Squats", "4", reps, rest, "Hands behind head, chest up"),
            _ex("Glute Bridges", "3", reps, rest, "Squeeze hard at top"),
            _ex("Calf Raises", "3", "20", "20 sec", "Full range of motion"),
        ], [_ex("Squat Jump Tabata", "8", "20 sec on, 10 sec off", "0", "4 minutes of pain, pure results")]
    if _has(day, "upper", "hiit"):
        return [
            _ex("Push-up to Renegade Row", "4", "10", rest, "Push-up, row left, row right = 1 rep"),
            _ex("Pike Push-ups", "3", reps, rest, "Hips high, head toward floor"),
            _ex("Dips (chair or bench)", "3", reps, rest, "90 degree elbow bend"),
            _ex("Plank Up-Downs", "3", "10 each arm", rest, "Forearm to hand, stay tight"),
            _ex("Shadow Boxing", "3", "60 sec", "30 sec", "Throw real punches, move your feet"),
        ], [_ex("100 Burpee Challenge", "1", "For time", "0", "Break as needed, just finish")]
    return [
        _ex("Burpee Box Jump", "4", "10", rest, "Burpee into jump onto step/box"),
        _ex("Walkout Push-ups", "3", "10", rest, "Walk hands out, push-up, walk back"),
        _ex("Squat Thrusters", "4", reps, rest, "Squat, explode up with arms overhead"),
        _ex("Plank Jacks", "3", "20", rest, "Jumping jacks in plank position"),
        _ex("Broad Jumps", "3", "10", rest, "Maximum distance each jump"),
        _ex("V-Ups", "3", "15", rest, "Touch toes at top"),
    ], [_ex("Death by Burpees", "1", "EMOM - add 1 each minute", "0", "Minute 1 = 1 burpee, minute 2 = 2... until failure")]


def _muscle(day: str, reps: str, rest: str) -> Tuple[List[Exercise], List[Exercise]]:
    if _has(day, "chest", "push"):
        return [
            _ex("Wide Push-ups", "4", reps, rest, "Hands wider than shoulders, squeeze chest"),
            _ex("Close-Grip Push-ups", "4", reps, rest, "Hands under chest, tricep focus"),
            _ex("Decline Push-ups", "3", reps, rest, "Feet elevated, more chest activation"),
            _ex("Dumbbell Floor Press", "4", reps, rest, "Control the weight, squeeze at top"),
            _ex("Pike Push-ups", "3", reps, rest, "Shoulder builder"),
            _ex("Tricep Dips", "3", reps, rest, "Deep stretch, full lockout"),
        ], [_ex("Push-up Drop Set", "1", "Wide to close to knees", "0", "No rest - go to failure on each variation")]
    if _has(day, "back", "pull"):
        return [
            _ex("Pull-ups or Inverted Rows", "4", reps, rest, "Full stretch, squeeze at top"),
            _ex("Dumbbell Rows", "4", "12 each", rest, "Pull to hip, squeeze lats"),
            _ex("Face Pulls (band or towel)", "3", reps, rest, "Pull to face, external rotation"),
            _ex("Superman Pulses", "3", "20", rest, "Small pulses, constant tension"),
            _ex("Bicep Curls", "3", reps, rest, "Slow negative, squeeze at top"),
            _ex("Hammer Curls", "3", reps, rest, "Neutral grip, brachialis focus"),
        ], [_ex("21s Curl Finisher", "2", "7+7+7", "60 sec", "7 bottom half, 7 top half, 7 full")]
    if _has(day, "leg"):
        return [
            _ex("Goblet Squats", "4", reps, rest, "Hold weight at chest, deep squat"),
            _ex("Bulgarian Split Squats", "3", "10 each", rest, "Rear foot elevated, control descent"),
            _ex("Romanian Deadlifts", "4", reps, rest, "Hinge at hips, feel hamstrings stretch"),
            _ex("Walking Lunges", "3", "12 each", rest, "Big steps, knee kisses floor"),
            _ex("Calf Raises", "4", "20", "30 sec", "Pause at top, full stretch at bottom"),
            _ex("Glute Bridges", "3", reps, rest, "Pause and squeeze 2 sec at top"),
        ], [_ex("Wall Sit Challenge", "3", "45 sec hold", "30 sec", "Thighs parallel, back flat on wall")]
    if _has(day, "shoulder", "arm"):
        return [
            _ex("Pike Push-ups", "4", reps, rest, "Feet elevated for more challenge"),
            _ex("Lateral Raises", "3", reps, rest, "Control the weight, slight bend in elbow"),
            _ex("Front Raises", "3", reps, rest, "Alternate arms, core tight"),
            _ex("Arnold Press", "3", reps, rest, "Rotate from curl to press"),
            _ex("Skull Crushers", "3", reps, rest, "Keep elbows fixed, extend fully"),
            _ex("Diamond Push-ups", "3", reps, rest, "Tricep finisher"),
        ], [_ex("Shoulder Burnout", "1", "10 each direction lateral raise", "0", "Front, side, rear - no rest")]
    if _has(day, "power", "compound"):
        return [
            _ex("Dumbbell Thrusters", "4", "10", "60 sec", "Squat to press - one fluid motion"),
            _ex("Renegade Rows", "4", "8 each", rest, "Push-up position, row each side"),
            _ex("Devil Press", "3", "10", "60 sec", "Burpee with dumbbell snatch"),
            _ex("Goblet Squats", "4", reps, rest, "Heavy and controlled"),
            _ex("Floor Press", "4", reps, rest, "Pause at bottom"),
        ], [_ex("Farmer Carry", "3", "40 yard walk", "45 sec", "Heavy as possible, grip tight")]
    return [
        _ex("Push-up Variations", "3", "10 each type", rest, "Wide, regular, diamond"),
        _ex("Curl 21s", "3", "21 total", rest, "7 bottom, 7 top, 7 full"),
        _ex("Tricep Extensions", "3", "15", rest, "Squeeze at full extension"),
        _ex("Lateral Raise Drop Set", "3", "10+10+10", rest, "Drop weight twice, no rest"),
        _ex("Plank Hold", "3", "45 sec", rest, "Tight core, don't sag"),
    ], [_ex("100 Push-up Challenge", "1", "For time", "0", "Any variation, just finish")]


def _recomp(day: str, reps: str, rest: str) -> Tuple[List[Exercise], List[Exercise]]:
    if _has(day, "push"):
        return [
            _ex("Push-ups", "4", "12", "45 sec", "Controlled tempo"),
            _ex("Dumbbell Floor Press", "4", reps, rest, "Heavy, pause at bottom"),
            _ex("Pike Push-ups", "3", reps, rest, "Shoulder focus"),
            _ex("Burpees", "3", "10", rest, "Explosive finish"),
            _ex("Dips", "3", reps, rest, "Full depth"),
        ], [_ex("Push-up AMRAP", "2", "60 sec max reps", "60 sec", "Go until failure")]
    if _has(day, "conditioning", "cardio"):
        return [
            _ex("Burpees", "4", "12", "30 sec", "Full extension every rep"),
            _ex("Mountain Climbers", "4", "40 sec", "20 sec", "Sprint pace"),
            _ex("Jump Squats", "3", "15", "30 sec", "Explode up"),
            _ex("High Knees", "3", "40 sec", "20 sec", "Drive those knees"),
            _ex("Plank Jacks", "3", "20", "30 sec", "Keep core tight"),
            _ex("Box Jumps or Step-ups", "3", "15", rest, "Use stairs if no box"),
        ], [_ex("Tabata Burpees", "8", "20 sec on, 10 off", "0", "4 minutes of pure conditioning")]
    if _has(day, "pull"):
        return [
            _ex("Pull-ups or Inverted Rows", "4", reps, rest, "Full range"),
            _ex("Dumbbell Rows", "4", "10 each", rest, "Heavy, squeeze lats"),
            _ex("Superman Holds", "3", "30 sec", rest, "Constant tension"),
            _ex("Explosive Rows", "3", "8", rest, "Fast pull, slow lower"),
            _ex("Bicep Curls", "3", reps, rest, "Strict form"),
        ], [_ex("Row + Jump Complex", "3", "10 rows + 10 jumps", "45 sec", "Strength meets power")]
    if _has(day, "hiit", "circuit"):
        return [
            _ex("Devil Press", "4", "8", rest, "Burpee + dumbbell snatch"),
            _ex("Thrusters", "4", "10", rest, "Squat to press"),
            _ex("Renegade Rows", "3", "8 each", rest, "Plank row"),
            _ex("Jump Lunges", "3", "10 each", rest, "Explosive"),
            _ex("Plank Up-Downs", "3", "10 each arm", rest, "Stay tight"),
        ], [_ex("EMOM Burpees", "10", "5 burpees per minute", "remaining time", "10 minute challenge")]
    if _has(day, "leg"):
        return [
            _ex("Goblet Squats", "4", reps, rest, "Deep, controlled"),
            _ex("Romanian Deadlifts", "4", "10", rest, "Feel the stretch"),
            _ex("Jump Squats", "3", "12", rest, "Explosive power"),
            _ex("Bulgarian Split Squats", "3", "10 each", rest, "Balance and strength"),
            _ex("Calf Raises", "3", "20", "20 sec", "Full ROM"),
        ], [_ex("Squat Hold + Jumps", "3", "30 sec hold + 10 jumps", "45 sec", "Burn then explode")]
    return [
        _ex("Thrusters", "4", "10", rest, "Full body power"),
        _ex("Burpee Pull-ups", "3", "8", "60 sec", "Burpee into pull-up if possible"),
        _ex("Dumbbell Complex", "3", "5 each movement", "60 sec", "Row, clean, press, squat - no drop"),
        _ex("Mountain Climbers", "3", "30 sec", "30 sec", "Sprint pace"),
        _ex("Plank Hold", "3", "45 sec", "30 sec", "Core control"),
    ], [
        _ex("Chipper", "1", "50 squats, 40 push-ups, 30 lunges, 20 burpees, 10 pull-ups", "0", "For time - no stopping")
    ]


_BUILDERS = {"fat_loss": _fat_loss, "muscle": _muscle, "recomp": _recomp}


def exercises_for(kind: str, workout_name: str, phase: str) -> Dict[str, List[Exercise]]:
    """Exercises per section for one day; main and finisher are picked by keywords in the workout name."""
    reps, rest = PHASE_VOLUME.get(phase, PEAK_VOLUME)
    main, finisher = _BUILDERS.get(kind, _recomp)(workout_name.lower(), reps, rest)
    return {"warmup": WARMUP, "main": main, "finisher": finisher, "cooldown": COOLDOWN}


def populate_workouts() -> Dict[str, object]:
    """Fill every program week with missing day workouts and exercises."""
    day_count = 0
    exercise_count = 0
    with db_conn(settings.app_db_path) as conn:
        weeks = conn.execute(
            """
            SELECT w.id, w.week_number, w.phase, t.name AS track_name
            FROM program_weeks w JOIN program_tracks t ON t.id = w.track_id
            ORDER BY t.name, w.week_number
            """
        ).fetchall()
        for week in weeks:
            kind = track_type(week["track_name"])
            table = WORKOUTS_BY_TRACK_TYPE[kind]
            for index, day in enumerate(DAYS_OF_WEEK):
                name, description, is_rest = table[day]
                existing = conn.execute(
                    "SELECT id FROM program_day_workouts WHERE week_id = ? AND day_of_week = ?",
                    (week["id"], day),
                ).fetchone()
                if existing:
                    workout_id = existing["id"]
                else:
                    workout_id = insert_day_workout(
                        conn,
                        week["id"],
                        {
                            "day_of_week": day,
                            "workout_name": name,
                            "workout_description": description,
                            "is_rest_day": is_rest,
                            "display_order": index,
                        },
                    )
                    day_count += 1
                if is_rest:
                    continue
                has_exercises = conn.execute(
                    "SELECT 1 FROM program_day_exercises WHERE day_workout_id = ? LIMIT 1", (workout_id,)
                ).fetchone()
                if has_exercises:
                    continue
                order = 0
                for section, exercises in exercises_for(kind, name, week["phase"]).items():
                    for ex in exercises:
                        insert_exercise(
                            conn,
                            workout_id,
                            {
                                "section_type": section,
                                "exercise_name": ex["name"],
                                "sets": ex["sets"],
                                "reps_or_time": ex["reps"],
                                "rest": ex["rest"],
                                "notes": ex["notes"],
                                "display_order": order,
                            },
                        )
                        order += 1
                        exercise_count += 1
    message = f"Created {day_count} day workouts and {exercise_count} exercises"
    logger.info("Seeded %d day workouts and %d exercises", day_count, exercise_count)
    return {"day_workouts_created": day_count, "exercises_created": exercise_count, "message": message}
