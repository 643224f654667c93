import threading

import pytest

from utils.concurrency import run_concurrently
from utils.logging_utils import mask_value, sanitize_payload


@pytest.mark.unit
class TestRunConcurrently:
    def test_results_keep_call_order(self):
        assert run_concurrently(lambda: 1, lambda: "two", lambda: [3]) == (1, "two", [3])

    def test_calls_run_in_parallel(self):
        barrier = threading.Barrier(2, timeout=5)

        def wait():
            barrier.wait()
            return True

        assert run_concurrently(wait, wait) == (True, True)

    def test_first_error_is_raised_after_all_calls_finish(self):
        finished = []

        def slow():
            finished.append("slow")
            return "ok"

        def fail():
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            run_concurrently(fail, slow)
        assert finished == ["slow"]

    def test_single_call_runs_inline(self):
        assert run_concurrently(threading.current_thread) == (threading.current_thread(),)

    def test_no_calls(self):
        assert run_concurrently() == ()

    def test_nested_fan_out_under_load_completes(self):
        outer_requests = 32
        barrier = threading.Barrier(outer_requests, timeout=5)
        done = []

        def request(n):
            barrier.wait()
            inner = run_concurrently(lambda: n, lambda: n * 2)
            done.append(run_concurrently(lambda: inner, lambda: None)[0])

        threads = [threading.Thread(target=request, args=(n,), daemon=True) for n in range(outer_requests)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)

        assert not any(thread.is_alive() for thread in threads)
        assert sorted(done) == [(n, n * 2) for n in range(outer_requests)]


@pytest.mark.unit
class TestLoggingUtils:
    def test_mask_value(self):
        assert mask_value("ada@example.com") == "ad***@example.com"
        assert mask_value("eyJhbGciOiJIUzI1NiJ9") == "eyJh...NiJ9"
        assert mask_value("short") == "***"
        assert mask_value(None) is None

    def test_sanitize_payload_keeps_only_allowed_keys(self):
        payload = {"email": "ada@example.com", "phone": "+351900000000", "comments": "hello"}

        sanitized = sanitize_payload(payload, ["email", "phone"])

        assert sanitized == {"email": "ad***@example.com", "phone": "+351...0000"}
