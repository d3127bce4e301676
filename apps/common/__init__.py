import logging
from enum import StrEnum
from pathlib import Path
from types import MappingProxyType
from typing import Any

from decorator import decorator
from flask import current_app as app
from flask import g
from markdown import markdown
from yaml import YAMLError
from yaml import safe_load as parse_yaml

logger = logging.getLogger(__name__)


class CacheCategory(StrEnum):
    schedule = "schedule"
    doc = "doc"
    default = "default"


CACHE_CONTROL = MappingProxyType(
    {
        CacheCategory.schedule: "public, max-age=300, s-maxage=300, stale-while-revalidate=86400",
        CacheCategory.doc: "public, max-age=3600, s-maxage=3600, stale-while-revalidate=86400",
        CacheCategory.default: "no-cache",
    }
)


def directive_for(category: CacheCategory | str) -> str:
    try:
        return CACHE_CONTROL[CacheCategory(category)]
    except ValueError:
        return CACHE_CONTROL[CacheCategory.default]


def cache_control(category: CacheCategory):
    """
    Decorator declaring the caching policy of a view.

    The policy is attached to whatever response the request ends up with,
    including error responses, so a 404 or 502 is cached exactly like the
    page it replaced.
    """

    def call(f, *args, **kw):
        g.cache_category = category
        return f(*args, **kw)

    return decorator(call)


def load_utility_functions(app_obj):
    @app_obj.after_request
    def send_cache_control(response):
        category = g.get("cache_category")
        if category is not None:
            response.headers["Cache-Control"] = directive_for(category)
        return response


def load_page(slug: str) -> tuple[dict[str, Any], str] | None:
    """Load a markdown page and its YAML front matter from the content root.

    Returns None if there's no such page.
    """
    content_root = Path(app.root_path, app.config["CONTENT_ROOT"]).resolve()
    source_file = content_root.joinpath(f"{slug}.md").resolve()

    if not source_file.is_relative_to(content_root) or not source_file.is_file():
        return None

    with open(source_file) as f:
        source = f.read()

    if "---" not in source:
        logger.warning("Content page %s has no front matter", slug)
        return {}, markdown(source)

    (metadata, content) = source.split("---", 1)
    try:
        frontmatter = parse_yaml(metadata)
    except YAMLError as e:
        logger.warning("Content page %s has unparseable front matter: %s", slug, e)
        frontmatter = None

    if frontmatter is not None and not isinstance(frontmatter, dict):
        logger.warning("Content page %s front matter is not a mapping", slug)
        frontmatter = None

    return frontmatter or {}, markdown(content, extensions=["markdown.extensions.nl2br"])
