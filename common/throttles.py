from rest_framework.throttling import UserRateThrottle


class VeryStrictThrottle(UserRateThrottle):
    """
    Used for money-moving endpoints: deposits, withdrawals, daily bonus.
    """
    scope = 'very_strict'


class StrictThrottle(UserRateThrottle):
    """
    Used for joining tournaments, spinning the wheel and admin writes.
    """
    scope = 'strict'


class MediumThrottle(UserRateThrottle):
    """
    Used for authenticated reads such as the transaction history.
    """
    scope = 'medium'


class RelaxedThrottle(UserRateThrottle):
    """
    Used for public listings like tournaments and the leaderboard.
    """
    scope = 'relaxed'
