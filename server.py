# server.py
# Лёгкий локальный сервер (Flask): отдаёт фронт и принимает действия игрока.
# Запуск: python server.py  (или flask --app server run)

from __future__ import annotations
from typing import Dict, Any
import os, uuid

from flask import Flask, request, send_from_directory, jsonify

import game
import content

APP_DIR = os.path.dirname(os.path.abspath(__file__))
STATIC_DIR = os.path.join(APP_DIR, "static")

HOST = os.environ.get("SCOUNDREL_HOST", "127.0.0.1")
PORT = int(os.environ.get("SCOUNDREL_PORT", "5173"))
DEBUG = os.environ.get("SCOUNDREL_DEBUG", "1") not in ("0", "false", "no")
MAX_SESSIONS = int(os.environ.get("SCOUNDREL_MAX_SESSIONS", "500"))

app = Flask(__name__, static_folder=STATIC_DIR, static_url_path="/static")

# Партии живут только в памяти процесса: между перезапусками не сохраняем.
# Сверх MAX_SESSIONS выселяем самые давние.
SESSIONS: Dict[str, Dict[str, Any]] = {}

def make_sid() -> str:
    return f"sid_{uuid.uuid4().hex[:10]}"

def read_json() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}

def known_sid(sid: Any) -> bool:
    return isinstance(sid, str) and sid in SESSIONS

def save_state(sid: str, st: Dict[str, Any]) -> None:
    st["updated_at"] = game.now_ts()
    SESSIONS[sid] = st
    while len(SESSIONS) > MAX_SESSIONS:
        oldest = min((k for k in SESSIONS if k != sid), key=lambda k: SESSIONS[k]["updated_at"])
        SESSIONS.pop(oldest)
        app.logger.info("session %s evicted", oldest)

@app.get("/")
def index():
    return send_from_directory(app.static_folder, "index.html")

@app.get("/rules")
def rules():
    return send_from_directory(app.static_folder, content.RULES_FILE, mimetype="text/plain")

@app.post("/api/bootstrap")
def api_bootstrap():
    sid = read_json().get("sid")
    if not known_sid(sid):
        sid = make_sid()
        st = game.default_state()
    else:
        st = SESSIONS[sid]
    save_state(sid, st)
    return jsonify({"sid": sid, "state": game.sanitize_for_client(st)})

@app.post("/api/action")
def api_action():
    data = read_json()
    sid = data.get("sid")
    action = data.get("action")
    if not sid:
        return jsonify({"error": "missing sid"}), 400
    if not known_sid(sid):
        # фронт в ответ заново делает bootstrap
        return jsonify({"error": "unknown sid"}), 404
    st = SESSIONS[sid]
    if not isinstance(action, dict):
        app.logger.warning("bad action %r from %s", action, sid)
        st.setdefault("ui", {})["toast"] = "Ошибка: неверный формат действия"
    else:
        try:
            game.dispatch(st, action)
        except (TypeError, ValueError) as e:
            # кривое действие с фронта — состояние не трогаем, чтобы фронт не зависал
            app.logger.warning("bad action %r from %s: %s", action, sid, e)
            st.setdefault("ui", {})["toast"] = f"Ошибка: {type(e).__name__}"
    save_state(sid, st)
    return jsonify({"sid": sid, "state": game.sanitize_for_client(st)})

@app.get("/api/content")
def api_content():
    return jsonify({
        "card_types": content.CARD_TYPES,
        "card_info": content.CARD_TYPE_INFO,
        "deck": content.create_deck(),
        "deck_size": content.DECK_SIZE,
        "max_health": content.MAX_HEALTH,
        "room_size": content.ROOM_SIZE,
        "seed_limit": content.SEED_LIMIT,
        "controls": content.CONTROLS,
    })

@app.get("/api/ping")
def ping():
    return jsonify({"ok": True})

if __name__ == "__main__":
    # по умолчанию host=127.0.0.1 — только локально
    app.run(host=HOST, port=PORT, debug=DEBUG)
