"""Tests for RetryPolicy – exponential backoff between failed logins."""

import os
import unittest
from unittest.mock import patch

from fbx_exporter.auth.backoff import RetryPolicy


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class TestRetryPolicyDelays(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.policy = RetryPolicy(min_delay=5.0, max_delay=60.0, clock=self.clock)

    def test_initial_state(self):
        self.assertEqual(self.policy.current_delay, 5.0)
        self.assertEqual(self.policy.failure_count, 0)
        self.assertFalse(self.policy.should_wait_before_retry())

    def test_delay_after_each_failure(self):
        for k in range(1, 10):
            self.policy.record_failure()
            self.assertEqual(self.policy.failure_count, k)
            self.assertEqual(self.policy.current_delay, min(5.0 * 2 ** (k - 1), 60.0))

    def test_delay_capped_at_max(self):
        for _ in range(20):
            self.policy.record_failure()
        self.assertEqual(self.policy.current_delay, 60.0)

    def test_reset_returns_to_min_delay(self):
        for _ in range(4):
            self.policy.record_failure()
        self.policy.reset()
        self.assertEqual(self.policy.failure_count, 0)
        self.assertEqual(self.policy.current_delay, 5.0)
        self.assertFalse(self.policy.should_wait_before_retry())

    def test_sequence_restarts_after_reset(self):
        for _ in range(3):
            self.policy.record_failure()
        self.policy.reset()
        self.policy.record_failure()
        self.assertEqual(self.policy.current_delay, 5.0)
        self.policy.record_failure()
        self.assertEqual(self.policy.current_delay, 10.0)


class TestRetryPolicyWindow(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.policy = RetryPolicy(min_delay=5.0, max_delay=60.0, clock=self.clock)

    def test_wait_right_after_failure(self):
        self.policy.record_failure()
        self.assertTrue(self.policy.should_wait_before_retry())

    def test_window_is_twice_the_delay(self):
        self.policy.record_failure()
        self.clock.advance(9.9)
        self.assertTrue(self.policy.should_wait_before_retry())
        self.clock.advance(0.2)
        self.assertFalse(self.policy.should_wait_before_retry())

    def test_window_grows_with_delay(self):
        self.policy.record_failure()
        self.policy.record_failure()
        self.clock.advance(15.0)
        self.assertTrue(self.policy.should_wait_before_retry())

    def test_last_failure_time_is_stamped(self):
        self.clock.advance(42.0)
        self.policy.record_failure()
        self.assertEqual(self.policy.last_failure_time, 1042.0)


class TestRetryPolicyConfiguration(unittest.TestCase):
    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            policy = RetryPolicy.from_environment()
        self.assertEqual(policy.min_delay, 5.0)
        self.assertEqual(policy.max_delay, 60.0)

    def test_environment_overrides(self):
        env = {"FBX_RETRY_MIN_DELAY": "2s", "FBX_RETRY_MAX_DELAY": "5m"}
        with patch.dict(os.environ, env, clear=True):
            policy = RetryPolicy.from_environment()
        self.assertEqual(policy.min_delay, 2.0)
        self.assertEqual(policy.max_delay, 300.0)
        self.assertEqual(policy.current_delay, 2.0)

    def test_invalid_values_fall_back(self):
        env = {"FBX_RETRY_MIN_DELAY": "soon", "FBX_RETRY_MAX_DELAY": "10"}
        with patch.dict(os.environ, env, clear=True):
            policy = RetryPolicy.from_environment()
        self.assertEqual(policy.min_delay, 5.0)
        self.assertEqual(policy.max_delay, 60.0)

    def test_max_below_min_is_raised_to_min(self):
        policy = RetryPolicy(min_delay=30.0, max_delay=10.0)
        self.assertEqual(policy.max_delay, 30.0)


if __name__ == "__main__":
    unittest.main()
