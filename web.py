#!/usr/bin/env python3
"""
Yatzy Web — Flask JSON API + WebSocket server for browser-based play.

One FrontendAdapter (one game session) per app instance. Every endpoint
returns the projected game view; rejected requests get a 400 with
{"error": message} and leave the game untouched.

Endpoints:
    POST /api/game/new      Start a new game
    GET  /api/game/state    Current view
    POST /api/game/end      End the game
    POST /api/dice/roll     Roll unheld dice
    POST /api/dice/hold     {index, held}
    POST /api/score         {category}
    GET  /api/scores/high   High score history
    GET  /api               Health check
    WS   /ws                JSON actions, one view per reply
"""
import argparse
import json
import logging
import random

logger = logging.getLogger(__name__)

from flask import Flask, jsonify, request
from flask_sock import Sock

from game_engine import InvalidCategory, YatzyError, category_by_name
from game_session import GameSession
from frontend_adapter import FrontendAdapter
from settings import load_settings, save_settings


class RequestRejected(YatzyError):
    """A malformed request from the client (HTTP 400)."""


def create_app(adapter=None):
    """Create the Flask application.

    Args:
        adapter: Optional FrontendAdapter (creates a fresh game if not provided)

    Returns:
        Flask application instance
    """
    app = Flask(__name__)
    sock = Sock(app)
    adapter = adapter if adapter is not None else FrontendAdapter()
    app.extensions["yatzy"] = adapter

    @app.errorhandler(RequestRejected)
    @app.errorhandler(InvalidCategory)
    def rejected(exc):
        logger.warning("Rejected request to %s: %s", request.path, exc)
        return jsonify({"error": str(exc)}), 400

    # ---------- game ----------

    @app.post("/api/game/new")
    def new_game():
        return jsonify(adapter.do_new_game())

    @app.get("/api/game/state")
    def game_state():
        return jsonify(adapter.get_state())

    @app.post("/api/game/end")
    def end_game():
        return jsonify(adapter.do_end())

    # ---------- dice & score ----------

    @app.post("/api/dice/roll")
    def roll_dice():
        return jsonify(adapter.do_roll())

    @app.post("/api/dice/hold")
    def set_hold():
        return jsonify(_apply_hold(adapter, _json_body()))

    @app.post("/api/score")
    def place_score():
        return jsonify(_apply_score(adapter, _json_body()))

    @app.get("/api/scores/high")
    def high_scores():
        limit = max(request.args.get("limit", 10, type=int), 0)
        return jsonify({
            "highScore": adapter.get_high_score(),
            "gamesPlayed": adapter.get_games_played(),
            "scores": adapter.get_high_scores(limit=limit),
        })

    @app.get("/api")
    def health():
        return jsonify({"message": "Yatzy API is running", "game": adapter.get_state()})

    @sock.route("/ws")
    def websocket(ws):
        """WebSocket handler — one reply per JSON action."""
        try:
            while True:
                data = ws.receive()
                if data is None:
                    break
                try:
                    action = json.loads(data)
                except json.JSONDecodeError:
                    logger.warning("Invalid JSON from client: %s", data)
                    continue
                if not isinstance(action, dict):
                    logger.warning("Ignoring non-object message: %s", data)
                    continue
                ws.send(json.dumps(_handle_action(adapter, action)))
        except Exception:
            logger.error("WebSocket receive error", exc_info=True)

    return app


def _json_body():
    """Request body as a dict; anything that isn't a JSON object counts as {}."""
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _apply_hold(adapter, body):
    index = body.get("index")
    if isinstance(index, bool) or not isinstance(index, (int, float)):
        raise RequestRejected("index must be a number")
    if isinstance(index, float) and index.is_integer():
        index = int(index)
    return adapter.do_hold(index, bool(body.get("held")))


def _apply_score(adapter, body):
    name = body.get("category")
    if not name or not isinstance(name, str):
        raise RequestRejected("category is required and must be a string")
    cat = category_by_name(name)
    if cat is None:
        raise RequestRejected(f"Unknown category: {name}")
    return adapter.do_score(cat)


def _handle_action(adapter, action):
    """Dispatch a client action to the adapter and return the reply."""
    cmd = action.get("action", "")
    try:
        if cmd == "roll":
            return adapter.do_roll()

        elif cmd == "hold":
            return _apply_hold(adapter, action)

        elif cmd == "score":
            return _apply_score(adapter, action)

        elif cmd == "new":
            return adapter.do_new_game()

        elif cmd == "end":
            return adapter.do_end()

        elif cmd == "state":
            return adapter.get_state()

    except (RequestRejected, InvalidCategory) as exc:
        logger.warning("Rejected action %r: %s", cmd, exc)
        return {"error": str(exc)}

    return {"error": f"Unknown action: {cmd}"}


def parse_args(argv=None, settings=None):
    """Parse command-line arguments, using stored settings as defaults."""
    if settings is None:
        settings = load_settings()
    parser = argparse.ArgumentParser(description="Yatzy Web Server")
    parser.add_argument("--host", default=settings["host"],
                        help=f"Host to bind (default: {settings['host']})")
    parser.add_argument("--port", type=int, default=settings["port"],
                        help=f"Port (default: {settings['port']})")
    parser.add_argument("--debug", action="store_true", default=settings["debug"],
                        help="Enable debug mode")
    parser.add_argument("--seed", type=int, default=settings["seed"],
                        help="Seed the dice for a reproducible game")
    parser.add_argument("--log-level", default=settings["log_level"],
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level")
    parser.add_argument("--save", action="store_true",
                        help="Store these options as the new defaults")
    return parser.parse_args(argv)


def settings_from_args(args):
    """The persistable part of the parsed options, keyed like DEFAULTS."""
    return {
        "host": args.host,
        "port": args.port,
        "debug": args.debug,
        "seed": args.seed,
        "log_level": args.log_level,
    }


def main(argv=None):
    """Entry point for the web server."""
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if args.save:
        save_settings(settings_from_args(args))
        logger.info("Saved settings as new defaults")

    session = GameSession(rng=random.Random(args.seed))
    app = create_app(FrontendAdapter(session))

    print(f"Starting Yatzy web server at http://{args.host}:{args.port}")
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
