"""Allow ``python -m codex_wrapped``."""

from codex_wrapped.cli import app

if __name__ == "__main__":
    app()
