"""
    Schedule App

    Serves the agenda for a conference year as JSON, for the frontend to render.
    Where the agenda comes from is decided per year by its session source:

        * `none` - there's no agenda (yet), and an empty list is served.
        * `sessionize` - the grid and speakers are fetched from that year's
          Sessionize endpoint, validated, and tidied up before being served.

    A `sessionize` year with no endpoint is a configuration mistake, and is
    served as a 404 rather than an empty agenda.
"""
from flask import Blueprint

schedule = Blueprint("schedule", __name__)


from . import agenda  # noqa
