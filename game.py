# game.py
# Сердце игры: колода, комната, оружие, здоровье, счёт. Состояние — обычный dict, меняется только здесь.

from __future__ import annotations
from typing import Dict, Any, List, Optional
import time, random, copy

import content
import prng

STATE_VERSION = 1

# ---- утилиты ----

def now_ts() -> int:
    return int(time.time())

def deep(obj):
    return copy.deepcopy(obj)

def random_seed() -> int:
    return random.randrange(content.SEED_LIMIT)

def log(game: Dict[str, Any], msg: str):
    game.setdefault("log", [])
    game["log"].append(msg)
    game["log"] = game["log"][-content.LOG_LIMIT:]  # ограничим историю

def toast(state: Dict[str, Any], msg: str):
    state.setdefault("ui", {})["toast"] = msg

def filled(room: List[Optional[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    return [c for c in room if c]

def remaining_cards(game: Dict[str, Any]) -> List[Dict[str, Any]]:
    return game["draw"] + filled(game["room"])

def weapon_limit(game: Dict[str, Any]) -> Optional[int]:
    # None — оружие ещё никого не убивало (или его нет), предела нет
    weapon = game.get("weapon")
    if not weapon or not weapon["slain"]:
        return None
    return int(weapon["slain"][-1]["value"])

def card_count(game: Dict[str, Any]) -> int:
    # Должно всегда совпадать с content.DECK_SIZE
    weapon = game.get("weapon")
    n = len(game["draw"]) + len(filled(game["room"])) + len(game["discard"])
    if weapon:
        n += 1 + len(weapon["slain"])
    return n

# ---- состояние ----

def empty_game() -> Dict[str, Any]:
    return {
        "status": "started",   # started / lost / won
        "draw": [],
        "discard": [],
        "room": [None] * content.ROOM_SIZE,
        "health": content.MAX_HEALTH,
        "last_room_avoided": False,
        "weapon": None,        # {"card": ..., "slain": [...]}
        "log": [],
    }

def default_state(seed: Optional[int] = None) -> Dict[str, Any]:
    state = {
        "version": STATE_VERSION,
        "updated_at": now_ts(),
        "seed": random_seed() if seed is None else int(seed),
        "game": empty_game(),
        "ui": {
            "toast": "",
        },
    }
    start_game(state)
    return state

def score(state: Dict[str, Any]) -> Dict[str, int]:
    game = state["game"]
    health = int(game["health"])
    won = health
    lost = health - sum(int(c["value"]) for c in remaining_cards(game) if c["type"] == "monster")
    status = game["status"]
    if status == "won":
        return {"won": won}
    if status == "lost":
        return {"lost": lost}
    return {"won": won, "lost": lost}

def can_avoid(game: Dict[str, Any]) -> bool:
    return (
        game["status"] == "started"
        and all(game["room"])
        and not game["last_room_avoided"]
    )

def sanitize_for_client(state: Dict[str, Any]) -> Dict[str, Any]:
    # Делаем "view": порядок колоды игроку не показываем, только размер.
    st = deep(state)
    game = st["game"]
    game["draw_count"] = len(game.pop("draw"))
    game["discard_count"] = len(game["discard"])
    game["remaining"] = len(remaining_cards(state["game"]))
    game["can_avoid"] = can_avoid(state["game"])
    game["weapon_limit"] = weapon_limit(state["game"])
    game["score"] = score(state)
    st["content_summary"] = {
        "card_types": content.CARD_TYPE_INFO,
        "max_health": content.MAX_HEALTH,
    }
    return st

# ---- партия ----

def new_game(state: Dict[str, Any], seed: Optional[int] = None) -> None:
    """Новая партия с новым сидом (случайным или заданным игроком)."""
    if seed is None:
        seed = random_seed()
    else:
        seed = int(seed)
        if not 0 <= seed < content.SEED_LIMIT:
            toast(state, f"Сид должен быть от 0 до {content.SEED_LIMIT - 1}.")
            return
    state["seed"] = seed
    start_game(state)
    toast(state, f"Новая партия, сид {seed}.")

def start_game(state: Dict[str, Any]) -> None:
    deck = content.create_deck()
    prng.shuffle(deck, int(state["seed"]))
    game = empty_game()
    game["draw"] = deck
    state["game"] = game
    log(game, f"Партия началась (сид {state['seed']}).")
    start_turn(state)
    state["updated_at"] = now_ts()

def start_turn(state: Dict[str, Any]) -> None:
    game = state["game"]
    room = game["room"]
    for i in range(content.ROOM_SIZE):
        if not game["draw"]:
            return
        if not room[i]:
            room[i] = game["draw"].pop(0)

def avoid_room(state: Dict[str, Any]) -> None:
    game = state["game"]
    if game["status"] != "started":
        return
    if not all(game["room"]):
        toast(state, "Сначала разберись с комнатой.")
        return
    if game["last_room_avoided"]:
        toast(state, "Нельзя избегать две комнаты подряд.")
        return
    # карты уходят под низ колоды в порядке слотов
    game["draw"].extend(game["room"])
    game["room"] = [None] * content.ROOM_SIZE
    game["last_room_avoided"] = True
    log(game, "Комната пропущена.")
    start_turn(state)
    state["updated_at"] = now_ts()

def play_card(state: Dict[str, Any], slot: int, barehanded: bool = False) -> None:
    game = state["game"]
    if game["status"] != "started":
        return
    if not 0 <= slot < content.ROOM_SIZE:
        return
    room = game["room"]
    card = room[slot]
    if not card:
        return

    value = int(card["value"])
    # куда уходит карта после розыгрыша; None — уже прикреплена к оружию
    to_discard: Optional[Dict[str, Any]] = card

    if card["type"] == "monster":
        if barehanded:
            game["health"] -= value
            log(game, f"Голыми руками: {content.card_label(card)}, −{value} здоровья.")
        else:
            weapon = game.get("weapon")
            if not weapon:
                toast(state, "Оружие не экипировано.")
                return
            limit = weapon_limit(game)
            if limit is not None and value >= limit:
                toast(state, f"Оружие годится только против монстров слабее {limit}.")
                return
            dmg = max(0, value - int(weapon["card"]["value"]))
            game["health"] -= dmg
            weapon["slain"].append(card)
            room[slot] = None
            to_discard = None
            log(game, f"{content.card_label(weapon['card'])} против {content.card_label(card)}: −{dmg} здоровья.")

    elif card["type"] == "weapon":
        old = game.get("weapon")
        if old:
            game["discard"].extend([old["card"], *old["slain"]])
        game["weapon"] = {"card": card, "slain": []}
        # оружие лежит в своём слоте, а не в сбросе
        room[slot] = None
        to_discard = None
        log(game, f"Экипировано: {content.card_label(card)}.")

    elif card["type"] == "potion":
        health = game["health"] + value
        # последнее зелье всей колоды лечит без предела — идёт в счёт
        if len(remaining_cards(game)) != 1:
            health = min(content.MAX_HEALTH, health)
        log(game, f"{content.card_label(card)}: +{health - game['health']} здоровья.")
        game["health"] = health

    state["updated_at"] = now_ts()

    if game["health"] <= 0:
        game["status"] = "lost"
        log(game, "Поражение.")
        toast(state, f"Поражение. Счёт: {score(state)['lost']}.")
        return

    if to_discard:
        room[slot] = None
        game["discard"].append(to_discard)

    if not filled(room) and not game["draw"]:
        game["status"] = "won"
        log(game, "Победа!")
        toast(state, f"Победа! Счёт: {score(state)['won']}.")
        return

    if len(filled(room)) == 1:
        # в комнате осталась одна карта — добираем новую комнату
        game["last_room_avoided"] = False
        start_turn(state)

# ---- действия с фронта ----

def dispatch(state: Dict[str, Any], action: Dict[str, Any]) -> None:
    typ = action.get("type")
    state.setdefault("ui", {}).setdefault("toast", "")
    state["ui"]["toast"] = ""

    if typ == "NEW_GAME":
        seed = action.get("seed")
        new_game(state, None if seed in (None, "") else int(seed))
        return

    if typ == "RESTART":
        start_game(state)
        toast(state, f"Заново, сид {state['seed']}.")
        return

    if typ == "AVOID_ROOM":
        avoid_room(state)
        return

    if typ == "PLAY_CARD":
        play_card(state, int(action.get("slot", -1)), action.get("barehanded") is True)
        return

    toast(state, "Неизвестное действие.")
