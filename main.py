import logging
import logging.config
from pathlib import Path

import yaml
from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from loggingmanager import create_logging_manager

# If we have logging handlers set up here, don't touch them.
# This is especially problematic during testing as we don't
# want to overwrite pytest's handlers. Note: if anything
# logs before this point, logging.basicConfig will install
# a default stderr StreamHandler.
if len(logging.root.handlers) == 0:
    install_logging = True
    root = Path(__file__).parent
    with open(root / "logging.yaml") as f:
        conf = yaml.load(f, Loader=yaml.FullLoader)
        if (root / "logging.override.yaml").is_file():
            with open(root / "logging.override.yaml") as fo:
                conf_overrides = yaml.load(fo, Loader=yaml.FullLoader)

                def update_logging(d, s):
                    for k, v in s.items():
                        if isinstance(v, dict):
                            d[k] = update_logging(d.get(k, {}), v)
                        elif v is not None:
                            d[k] = v
                    return d

                update_logging(conf, conf_overrides)

        logging.config.dictConfig(conf)

else:
    install_logging = False

logger = logging.getLogger(__name__)


def create_app(config_override=None, clock=None):
    app = Flask(__name__, static_folder=None)
    app.config.from_envvar("SETTINGS_FILE")
    if config_override:
        app.config.from_mapping(config_override)

    if install_logging:
        create_logging_manager(app)
        # Flask has now kindly installed its own log handler which we will summarily remove.
        app.logger.propagate = True
        app.logger.handlers = []
        if not app.debug:
            logging.root.setLevel(logging.INFO)
        else:
            logging.root.setLevel(logging.DEBUG)

    from models.clock import SystemClock
    from models.conference import load_conference_state

    app.extensions["clock"] = clock if clock is not None else SystemClock()
    app.extensions["conference_state"] = load_conference_state(app.config, app.root_path)

    # The content endpoints are public and read-only, so anyone may fetch them.
    CORS(app, resources={r"/app/.*": {"origins": "*"}}, send_wildcard=True)

    if app.config.get("NO_INDEX"):
        # Prevent staging site from being displayed on Google
        @app.after_request
        def send_noindex_header(response):
            response.headers["X-Robots-Tag"] = "noindex, nofollow"
            return response

    @app.after_request
    def send_security_headers(response):
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response

    from models.sessionize import FetchValidationError

    @app.errorhandler(FetchValidationError)
    def handle_fetch_error(e):
        app.logger.warning("Unable to load data from %s: %s", e.endpoint, e)
        return jsonify(message="Unable to load schedule data"), 502

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return jsonify(message=e.description), e.code

    if not app.debug:

        @app.errorhandler(Exception)
        def handle_exception(e):
            """Generic exception handler to catch and log unhandled exceptions in production."""
            if isinstance(e, HTTPException):
                return handle_http_exception(e)

            app.logger.exception("Unhandled exception in request: %s", request)
            return jsonify(message="Internal Server Error"), 500

    from apps.common import load_utility_functions

    load_utility_functions(app)

    from apps.base import base
    from apps.schedule import schedule

    app.register_blueprint(base)
    app.register_blueprint(schedule)

    return app
