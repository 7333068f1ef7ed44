class RequestTracker:
    """Hands out increasing sequence numbers and decides which completions may commit.

    A completion commits only if its sequence number is strictly greater than
    the highest one committed so far, so a slow older request can never
    overwrite the result of a newer one.
    """

    def __init__(self) -> None:
        self._last_issued = 0
        self._last_committed = 0

    def issue(self) -> int:
        self._last_issued += 1
        return self._last_issued

    def is_stale(self, seq: int) -> bool:
        return seq <= self._last_committed

    def try_commit(self, seq: int) -> bool:
        """Mark a completion as committed. Returns False if it is stale."""
        if self.is_stale(seq):
            return False
        self._last_committed = seq
        return True

    def invalidate(self) -> None:
        """Make every request issued so far stale, e.g. after the query it answered changed."""
        self._last_committed = self._last_issued

    @property
    def last_committed(self) -> int:
        return self._last_committed
