from collections import namedtuple
from decimal import Decimal

from common.exceptions import NoRewardsConfigured

Draw = namedtuple("Draw", ["reward", "roll"])


def draw_reward(rewards, rng):
    """
    Weighted draw over ``rewards`` in the order given.

    A uniform ``roll`` in [0, 1) is taken from ``rng``; the first reward whose
    cumulative probability reaches the roll wins. When the probabilities sum
    to less than the roll, the last reward is returned. The same rewards and
    the same roll always give the same result.
    """
    rewards = list(rewards)
    if not rewards:
        raise NoRewardsConfigured()

    roll = rng.random()
    threshold = Decimal(roll)
    cumulative = Decimal("0")
    for reward in rewards:
        cumulative += Decimal(reward.probability)
        if cumulative >= threshold:
            return Draw(reward, roll)
    return Draw(rewards[-1], roll)
