"""Flask web application exposing the activity window state."""

from datetime import datetime, timedelta  # Payload conversion
from typing import Optional  # Type hints

import flask  # Web server and templating

from .config import Config  # App configuration
from .window import NOT_APPLICABLE, Window  # Window queried per request


def _iso(t: Optional[datetime]) -> Optional[str]:
    return t.isoformat() if t is not None else None


def window_state(window: Window, interval: timedelta, now: datetime) -> dict:
    """Snapshot every window query for a single clock reading.

    Args:
      window: Window to query.
      interval: Tick length for `until_next_interval`.
      now: Reference time shared by all queries.

    Returns:
      A JSON-serializable dict.
    """
    tick = window.until_next_interval(interval, now)
    edges = {"next_start": None, "next_end": None, "previous_start": None}
    if not window.always_active:  # Edges are meaningless when always on
        edges = {
            "next_start": window.next_start(now),
            "next_end": window.next_end(now),
            "previous_start": window.previous_start(now),
        }
    return {
        "active": window.active(now),
        "always_active": window.always_active,
        "description": window.describe(),
        "now": now.isoformat(),
        "until_sec": window.until(now).total_seconds(),
        "until_end_sec": window.until_end(now).total_seconds(),
        "interval_sec": interval.total_seconds(),
        "until_next_interval_sec": None if tick == NOT_APPLICABLE else tick.total_seconds(),
        "next_start": _iso(edges["next_start"]),
        "next_end": _iso(edges["next_end"]),
        "previous_start": _iso(edges["previous_start"]),
    }


def create_app(window: Window, interval: Optional[timedelta] = None) -> flask.Flask:
    """Create and configure the Flask application.

    Args:
      window: Window to report on.
      interval: Tick length; defaults to `Config.INTERVAL_SEC`.

    Returns:
      A Flask app instance with routes for the dashboard and API.
    """
    app = flask.Flask(__name__)
    if interval is None:
        interval = timedelta(seconds=Config.INTERVAL_SEC)

    @app.route("/")
    def index():
        """Render the status page."""
        st = window_state(window, interval, window.now())
        return flask.render_template_string(_INDEX_TEMPLATE, st=st)

    @app.route("/api/window")
    def api_window():
        """Return the current window state as JSON."""
        return window_state(window, interval, window.now())

    return app


_INDEX_TEMPLATE = """
<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>Activity Window</title>
  <style>
    body { font-family: system-ui, Arial, sans-serif; margin: 0; background: #111; color: #eee; }
    header { padding: 12px 16px; background: #222; display: flex; align-items: center; gap: 12px; }
    .state { padding: 6px 10px; border-radius: 6px; font-weight: 600; font-size: 12px; }
    .state.on { background: #144d14; color: #bff5bf; }
    .state.off { background: #3a3a3a; color: #bbb; }
    main { padding: 16px; }
    .meta { color: #9aa; font-size: 12px; }
    td { padding: 4px 12px 4px 0; }
  </style>
  <meta http-equiv="refresh" content="30">
</head>
<body>
  <header>
    {% if st.active %}
      <span class="state on">Active</span>
    {% else %}
      <span class="state off">Dormant</span>
    {% endif %}
    <span class="meta">{{ st.description }}</span>
  </header>
  <main>
    <table>
      <tr><td>Now</td><td>{{ st.now }}</td></tr>
      {% if not st.always_active %}
        {% if st.active %}
          <tr><td>Ends in</td><td>{{ '%d' % st.until_end_sec }} s</td></tr>
          <tr><td>Next tick in</td><td>{{ '%d s' % st.until_next_interval_sec if st.until_next_interval_sec is not none else '-' }}</td></tr>
        {% else %}
          <tr><td>Starts in</td><td>{{ '%d' % st.until_sec }} s</td></tr>
        {% endif %}
        <tr><td>Next start</td><td>{{ st.next_start }}</td></tr>
        <tr><td>Next end</td><td>{{ st.next_end }}</td></tr>
      {% endif %}
    </table>
  </main>
</body>
</html>
"""
