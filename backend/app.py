import os
import logging
from flask import Flask, jsonify, request
from flask_cors import CORS
from dotenv import load_dotenv

from domain.constants import DIRECTION_NAMES

load_dotenv()

logger = logging.getLogger(__name__)


def _allowed_origins() -> list:
    # Allowed origins can be configured via CORS_ALLOWED_ORIGINS env var (comma-separated)
    allowed_origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
    if allowed_origins_env:
        return [o.strip() for o in allowed_origins_env.split(",") if o.strip()]
    # sensible defaults for local dev
    return [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]


def _parse_direction(payload: dict) -> tuple:
    """
    Accept either {"direction": "UP"} or {"dx": 0, "dy": -1}.

    Raises:
        ValueError: If the payload names no valid direction
    """
    if not isinstance(payload, dict):
        raise ValueError("Body must be a JSON object")

    name = payload.get("direction")
    if name is not None:
        direction = DIRECTION_NAMES.get(str(name).upper())
        if direction is None:
            raise ValueError(f"Unknown direction '{name}'. Use one of {', '.join(DIRECTION_NAMES)}")
        return direction

    if "dx" not in payload or "dy" not in payload:
        raise ValueError("Provide 'direction' or both 'dx' and 'dy'")
    return payload["dx"], payload["dy"]


def create_app(game) -> Flask:
    """
    Build the JSON control surface for a running SnakeGame.

    Args:
        game: The engine instance the endpoints read from and command
    """
    app = Flask(__name__)
    CORS(app, resources={r"/api/*": {"origins": _allowed_origins()}})

    def _status_response():
        return jsonify(game.status())

    @app.route("/api/state", methods=["GET"])
    def get_state():
        """
        Get the current snapshot plus the pause/active flags.
        """
        payload = game.state.value.to_dict()
        payload.update(game.status())
        return jsonify(payload)

    @app.route("/api/high-score", methods=["GET"])
    def get_high_score():
        return jsonify({"high_score": game.high_score})

    @app.route("/api/direction", methods=["POST"])
    def set_direction():
        """
        Change the direction used on the next tick.

        Body: {"direction": "UP"} or {"dx": 0, "dy": -1}
        """
        payload = request.get_json(silent=True) or {}
        try:
            dx, dy = _parse_direction(payload)
            game.set_direction(dx, dy)
        except ValueError as error:
            logger.warning(f"Rejected direction {payload}: {error}")
            return jsonify({"error": str(error)}), 400

        return jsonify({"dx": dx, "dy": dy})

    @app.route("/api/pause", methods=["POST"])
    def toggle_pause():
        game.toggle_pause()
        return _status_response()

    @app.route("/api/start", methods=["POST"])
    def start_game():
        game.start_game()
        return _status_response()

    @app.route("/api/restart", methods=["POST"])
    def restart_game():
        game.restart_game()
        return _status_response()

    @app.route("/api/menu", methods=["POST"])
    def return_to_menu():
        game.return_to_menu()
        return _status_response()

    return app


if __name__ == "__main__":
    from data_access.high_score_store import SqliteHighScoreStore
    from main import SnakeGame
    from services.tick_scheduler import GameLoop

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    game = SnakeGame(store=SqliteHighScoreStore())
    loop = GameLoop(game)
    loop.start()

    port = int(os.getenv("PORT", "5000"))
    try:
        create_app(game).run(host="0.0.0.0", port=port)
    finally:
        loop.stop()
