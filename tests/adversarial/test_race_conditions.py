"""
Adversarial tests for race condition attack prevention.

Verifies that concurrent attempts on the same rate limit key are
admitted atomically, preventing attackers from exploiting races to:
- Exceed an action's budget by firing requests simultaneously
- Corrupt a key's attempt history through concurrent modifications

Security rationale:
- Without mutual exclusion two callers can both observe the last free
  slot and both be admitted
- The limiter serializes read-prune-compare-append under one lock
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from src.domain.rate_limiter import SlidingWindowRateLimiter

# Apply adversarial marker to all tests in this module
pytestmark = pytest.mark.adversarial


class TestRaceConditionAttacks:
    """
    Adversarial tests simulating concurrent burst attacks.

    These tests fire many simultaneous attempts at one key and check the
    budget still holds exactly.
    """

    def test_concurrent_burst_admits_exactly_budget(self, limiter: SlidingWindowRateLimiter) -> None:
        """
        Simulate attacker firing a burst of concurrent sign-up attempts.

        Expected defense: exactly max_attempts calls are admitted.
        """
        num_attackers = 50
        barrier = threading.Barrier(num_attackers)
        results: list[bool] = []
        results_lock = threading.Lock()

        def attack() -> None:
            barrier.wait()
            allowed = limiter.is_allowed("signup", 3, 60_000)
            with results_lock:
                results.append(allowed)

        with ThreadPoolExecutor(max_workers=num_attackers) as executor:
            futures = [executor.submit(attack) for _ in range(num_attackers)]
            for f in futures:
                f.result()

        assert results.count(True) == 3, (
            f"Race condition vulnerability: {results.count(True)} attempts admitted (expected 3)"
        )
        assert results.count(False) == num_attackers - 3

    def test_concurrent_keys_do_not_interfere(self, limiter: SlidingWindowRateLimiter) -> None:
        """
        Simulate bursts on several keys at once.

        Expected defense: every key gets exactly its own budget.
        """
        keys = ["signup", "signin", "addTodo"]
        per_key = 20
        admitted = {key: 0 for key in keys}
        lock = threading.Lock()

        def attempt(key: str) -> None:
            if limiter.is_allowed(key, 5, 60_000):
                with lock:
                    admitted[key] += 1

        with ThreadPoolExecutor(max_workers=30) as executor:
            futures = [executor.submit(attempt, key) for key in keys for _ in range(per_key)]
            for f in futures:
                f.result()

        assert admitted == {key: 5 for key in keys}

    def test_concurrent_burst_with_key_cap(self, clock) -> None:
        """
        Simulate key-flooding: many distinct keys created concurrently.

        Expected defense: tracked keys never exceed the cap.
        """
        limiter = SlidingWindowRateLimiter(clock=clock, max_keys=100)

        with ThreadPoolExecutor(max_workers=20) as executor:
            futures = [
                executor.submit(limiter.is_allowed, f"signin:{i}", 5, 60_000) for i in range(1_000)
            ]
            for f in futures:
                assert f.result() is True

        assert limiter.tracked_keys == 100
