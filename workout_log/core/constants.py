"""Application constants."""

# Session limits (workout composer)
MAX_EXERCISES_PER_SESSION = 20
MAX_SETS_PER_EXERCISE_PER_SESSION = 10

# Header carrying the caller's user scope
USER_ID_HEADER = "X-User-Id"

SHARE_HASHTAGS = "#workoutdone #workoutlog #gym"
