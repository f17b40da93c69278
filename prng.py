# prng.py
# Детерминированный генератор и тасовки. Вся партия воспроизводится по одному числу (seed).

from __future__ import annotations
from typing import List, MutableSequence, Sequence, TypeVar

T = TypeVar("T")

# Константы подобраны так, чтобы цепочка вызовов не теряла точность в float64
# при seed < 100_000.
PRNG_MUL = 1839567234
PRNG_ADD = 972348567
PRNG_MOD = 8239451023

def next_random(seed: float) -> float:
    """Следующее значение последовательности в [0, 1). Повторный вызов на результате даёт следующее."""
    # Считаем именно во float: целочисленная арифметика дала бы другую последовательность.
    s = float(seed)
    return ((PRNG_MUL * s * PRNG_MOD + PRNG_ADD) % PRNG_MOD) / PRNG_MOD

def sub_seed(i: int, seed: int) -> float:
    return ((3333 * i + 2727 + seed) % 1000) / 1000

def shuffle(items: MutableSequence[T], seed: int) -> None:
    # Фишер–Йейтс на месте; для каждого индекса свой под-сид.
    for i in range(len(items) - 1, 0, -1):
        j = int(next_random(sub_seed(i, seed)) * (i + 1))
        items[i], items[j] = items[j], items[i]

def shuffled(items: Sequence[T], seed: int) -> List[T]:
    """Тасовка с копией: тянем случайный элемент из остатка, пока он не опустеет."""
    rest = list(items)
    out: List[T] = []
    r = float(seed)
    while rest:
        r = next_random(r)
        out.append(rest.pop(int(len(rest) * r)))
    return out
