"""ASGI entrypoint for the meeting admin API."""

from meeting_admin.api.app import create_app
from meeting_admin.containers import build_container

app = create_app(build_container())
