""" A middleware to export the conference year for logging.

    Werkzeug logs the request after the Flask app context has ended
    so we use Werkzeug's Local object to pass the year into the
    logging formatter.
"""

import logging
from werkzeug.local import Local, LocalManager

local = Local()
local_manager = LocalManager([local])


class ContextFormatter(logging.Formatter):
    """ A logging formatter which inserts the conference year
        the request resolved to into the logging record. """
    def format(self, record):
        record.conference_year = getattr(local, 'conference_year', None) or '-'
        return logging.Formatter.format(self, record)


def set_conference_year(year):
    """ Set the request's conference year for later use in logging. """
    local.conference_year = year


def create_logging_manager(app):
    app.wsgi_app = local_manager.make_middleware(app.wsgi_app)
