import os

# Keep the @track decorators as pass-throughs during tests (no Opik backend).
os.environ.setdefault("OPIK_TRACK_DISABLE", "true")
