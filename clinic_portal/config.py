import os

from dotenv import load_dotenv

load_dotenv()

API_URL = os.environ.get("CLINIC_API_URL", "http://127.0.0.1:8080").rstrip("/")

# No timeout unless one is configured; a hung request leaves the view as it was.
_timeout = os.environ.get("CLINIC_API_TIMEOUT")
API_TIMEOUT = float(_timeout) if _timeout else None

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

APP_TITLE = "Hospital CMS"
APP_ICON = "🏥"

# Slots offered by the "Add Doctor" form
AVAILABILITY_SLOTS = [
    "09:00-10:00",
    "10:00-11:00",
    "11:00-12:00",
    "12:00-13:00",
    "14:00-15:00",
    "15:00-16:00",
    "16:00-17:00",
]

SPECIALTIES = [
    "cardiologist",
    "dermatologist",
    "neurologist",
    "pediatrician",
    "orthopedic",
    "gynecologist",
    "psychiatrist",
    "dentist",
    "ophthalmologist",
    "ent",
    "urologist",
    "oncologist",
    "gastroenterologist",
    "general",
]
