TRACK_FRONTEND = "Frontend"
TRACK_BACKEND = "Backend"
TRACKS = (TRACK_FRONTEND, TRACK_BACKEND)
DEFAULT_TRACK = TRACK_FRONTEND

TEMPLATE_FILENAMES = {
    TRACK_FRONTEND: "Front-end.pdf",
    TRACK_BACKEND: "Back-end.pdf",
}

REGISTRATION_LABEL = "Registration No:"

MSG_INVALID_PAYLOAD = "Invalid payload"
MSG_NOT_ELIGIBLE = "You did not attend the class, sorry."
MSG_NO_NAME_ON_RECORD = "No name on record for this registration number."
MSG_GENERATION_FAILED = "Failed to generate certificate"

# Sample roster loaded by ``manage.py seed_attendees`` when no CSV is given.
SAMPLE_ATTENDEES = [
    {"name": "Nishant Singh", "reg": "FE123", "track": TRACK_FRONTEND, "attended": True},
    {"name": "Jane Doe", "reg": "BE987", "track": TRACK_BACKEND, "attended": True},
]
