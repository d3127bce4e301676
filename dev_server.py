import os

os.environ.setdefault("SETTINGS_FILE", os.path.join(os.path.dirname(os.path.abspath(__file__)), "config", "development.cfg"))

from main import create_app  # noqa: E402

app = create_app()

if __name__ == "__main__":
    app.run(port=int(os.environ.get("PORT", 5000)))
