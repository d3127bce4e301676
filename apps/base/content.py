"""
Content pages, written in markdown with YAML front matter, under CONTENT_ROOT.
"""

import logging

from flask import abort, jsonify

from models.clock import FixedClock, get_clock
from models.conference import get_conference_state, get_year_config

from ..common import CacheCategory, cache_control, load_page
from . import base

logger = logging.getLogger(__name__)


@base.route("/app/content/<path:slug>")
@cache_control(CacheCategory.doc)
def content(slug: str):
    if slug.startswith("static/"):
        abort(404, "Not Found")

    page = load_page(slug)
    if page is None:
        abort(404, "Not Found")

    frontmatter, post = page
    if frontmatter.get("draft"):
        abort(404, "Not Found")
    if not frontmatter.get("title"):
        logger.warning("Missing title in frontmatter for %s", slug)
        abort(404, "Not Found")

    conference = get_year_config(None, get_conference_state(), FixedClock.sample(get_clock()))
    return jsonify(frontmatter=frontmatter, post=post, conferenceState=conference.to_dict())
