# content.py
# Данные: типы карт, состав колоды, правила. Держим в одном месте, движок только читает.

from __future__ import annotations
from typing import Dict, List, Any

CARD_TYPES = ["monster", "weapon", "potion"]

MAX_HEALTH = 20
ROOM_SIZE = 4
SEED_LIMIT = 100_000   # сид показывается игроку, держим его коротким
LOG_LIMIT = 80

MONSTER_VALUES = range(2, 15)   # по две копии
ITEM_VALUES = range(2, 11)      # оружие и зелья по одной

CARD_TYPE_INFO: Dict[str, Dict[str, str]] = {
    "monster": {
        "name": "Монстр",
        "desc": "Бей оружием (урон = сила − оружие) или голыми руками (полный урон).",
    },
    "weapon": {
        "name": "Оружие",
        "desc": "Экипируется. Каждый следующий монстр должен быть слабее предыдущего убитого.",
    },
    "potion": {
        "name": "Зелье",
        "desc": "Лечит на своё значение, но не выше 20. Последняя карта колоды лечит без предела.",
    },
}

CONTROLS = [
    {"key": "R", "desc": "заново (тот же сид)"},
    {"key": "N", "desc": "новая игра (новый сид)"},
    {"key": "A", "desc": "избежать комнаты"},
    {"key": "1/2/3/4", "desc": "сыграть карту"},
    {"key": "H/J/K/L", "desc": "сыграть карту"},
    {"key": "Shift", "desc": "+ карта: голыми руками"},
]

RULES_FILE = "rules.txt"

def make_card(ctype: str, value: int) -> Dict[str, Any]:
    return {"type": ctype, "value": int(value)}

def create_deck() -> List[Dict[str, Any]]:
    # 26 монстров + 9 оружий + 9 зелий = 44.
    # Порядок до тасовки важен: от него зависит расклад для каждого сида.
    deck: List[Dict[str, Any]] = []
    for value in MONSTER_VALUES:
        deck.append(make_card("monster", value))
        deck.append(make_card("monster", value))
    for value in ITEM_VALUES:
        deck.append(make_card("weapon", value))
        deck.append(make_card("potion", value))
    return deck

DECK_SIZE = 2 * len(MONSTER_VALUES) + 2 * len(ITEM_VALUES)

def card_label(card: Dict[str, Any]) -> str:
    return f"{CARD_TYPE_INFO[card['type']]['name']} {card['value']}"
