import os

from werkzeug.middleware.proxy_fix import ProxyFix

os.environ.setdefault("SETTINGS_FILE", os.path.join(os.path.dirname(os.path.abspath(__file__)), "config", "default.cfg"))

from main import create_app  # noqa: E402

# We sit behind the CDN, which sets X-Forwarded-For and X-Forwarded-Proto
app = ProxyFix(create_app(), x_for=1, x_proto=1)
