# Lets uvicorn find the app from the repository root:
#   uvicorn main:app --host 0.0.0.0 --port 8000

from hr_attendance.main import app  # noqa: F401
