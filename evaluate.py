# -*- coding: utf-8 -*-
"""
Evaluate a simple playing policy on the merge engine.
"""
from collections import Counter
from typing import Callable, Dict

import numpy as np
from numpy.random import Generator, default_rng
from tqdm import trange

from tilemerge import Direction, TwentyFortyEight
from tilemerge.core import compute_move


def random_policy(board: np.ndarray, rng: Generator) -> Direction:
    """Pick a random direction among those that change the board."""
    legal = [direction for direction in Direction if compute_move(board, direction).moved]
    return legal[rng.integers(len(legal))]


def greedy_policy(board: np.ndarray, rng: Generator) -> Direction:
    """Pick the direction with the best immediate score, ties broken at random."""
    results = {direction: compute_move(board, direction) for direction in Direction}
    legal = [direction for direction, result in results.items() if result.moved]
    best = max(results[direction].score for direction in legal)
    candidates = [direction for direction in legal if results[direction].score == best]
    return candidates[rng.integers(len(candidates))]


POLICIES: Dict[str, Callable[[np.ndarray, Generator], Direction]] = {
    "random": random_policy,
    "greedy": greedy_policy,
}


def evaluate(method: str, length: int = 10, seed: int | None = None) -> Dict[int, int]:
    """
    Evaluate a playing policy.

    Parameters
    ----------
    method : str
        The name of the policy to evaluate.
    length : int, optional
        The number of games to play (default is 10).
    seed : int, optional
        Random seed for reproducibility.

    Returns
    -------
    Dict[int, int]
        Number of games per maximum tile reached.
    """
    policy = POLICIES[method]
    rng = default_rng(seed)
    env = TwentyFortyEight(seed=seed)
    score = []

    with trange(length) as period:
        for num in period:
            env.reset()
            rewards, done = 0, False

            # ##: Play a game.
            while not done:
                _, reward, done = env.step(policy(env.board, rng))
                rewards += reward

                # ##: Log.
                period.set_description(f"Evaluation: {num + 1}")
                period.set_postfix(score=rewards, max=np.max(env.board))

            # ##: Save max cells.
            score.append(int(np.max(env.board)))

    # ##: Final log.
    frequency = Counter(score)
    return dict(frequency)


if __name__ == "__main__":
    from argparse import ArgumentParser

    parser = ArgumentParser()
    parser.add_argument("--method", type=str, default="greedy", choices=sorted(POLICIES))
    parser.add_argument("--length", type=int, default=10)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    result = evaluate(method=args.method, length=args.length, seed=args.seed)
    print(f"Evaluation of the {args.method} policy, max tiles: {result}")
