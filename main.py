"""Application entrypoint: builds the configured window and serves its status."""

import sys  # Exit status on bad configuration

from activity_window.boundary import ParseError  # Invalid window specs
from activity_window.config import Config  # App configuration
from activity_window.web import create_app  # Flask app factory


def main() -> None:
    """Create the window and run the Flask development server."""
    try:
        window = Config.make_window()
    except ParseError as e:
        print(f"[awin] Invalid window configuration: {e}", flush=True)
        sys.exit(1)
    print(f"[awin] {window.describe()} (lat={window.latitude}, long={window.longitude})", flush=True)
    app = create_app(window)
    # Flask's built-in server; queries are read-only so threaded is safe
    app.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG, threaded=True)


if __name__ == "__main__":
    main()
