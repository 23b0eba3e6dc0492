from __future__ import annotations

from pathlib import Path

from heirloom.services.dates import extract_year
from heirloom.services.gedcom_import.records import LifeEvent

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".tiff", ".bmp", ".webp", ".heic"}
VIDEO_EXTENSIONS = {".mp4", ".mov", ".m4v", ".avi", ".webm"}
AUDIO_EXTENSIONS = {".mp3", ".m4a", ".wav", ".ogg", ".aac"}

_EVENT_PHRASES = {
    "Birth": "was born",
    "Death": "passed away",
    "Burial": "was laid to rest",
    "Residence": "lived here",
    "Departure/Emigration": "emigrated",
    "Arrival/Immigration": "immigrated",
    "Census": "was recorded in the census",
    "Graduation": "graduated",
    "Bar Mitzvah": "celebrated a bar mitzvah",
    "Bat Mitzvah": "celebrated a bat mitzvah",
    "Confirmation": "was confirmed",
}


def format_event_sentence(event: LifeEvent, person_name: str) -> str:
    if event.type == "Marriage":
        phrase = f"married {event.spouse_name}" if event.spouse_name else "was married"
    else:
        phrase = _EVENT_PHRASES.get(event.type, f"recorded an event ({event.type.lower()})")
    sentence = f"{person_name} {phrase}"
    year = extract_year(event.date)
    if year:
        sentence += f" in {year}"
    return sentence + "."


def infer_media_kind(filename: str, mime_type: str | None = None) -> str:
    mime = (mime_type or "").lower()
    if mime.startswith("image/"):
        return "photo"
    if mime.startswith("video/"):
        return "video"
    if mime.startswith("audio/"):
        return "audio"
    suffix = Path(filename).suffix.lower()
    if suffix in IMAGE_EXTENSIONS:
        return "photo"
    if suffix in VIDEO_EXTENSIONS:
        return "video"
    if suffix in AUDIO_EXTENSIONS:
        return "audio"
    return "document"
