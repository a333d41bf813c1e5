"""Tests for the monotonic and non-monotonic ULID generators."""

import re
import threading

import pytest
from pydantic import ValidationError
from structlog.testing import capture_logs

from ulid_workers.base32 import ENCODING
from ulid_workers.errors import ULIDOverflowError, ULIDRangeError, ULIDTypeError
from ulid_workers.generator import (
    FactoryOptions,
    MonotonicULIDGenerator,
    NonMonotonicULIDGenerator,
    ulid,
    ulid_factory,
)
from ulid_workers.metrics import get_counter
from ulid_workers.timestamp import decode_time

ULID_RE = re.compile(r"^[0-9A-HJKMNP-TV-Z]{26}$")


class TestUlidFactory:
    """Test generator selection and option validation."""

    def test_default_is_monotonic(self):
        assert isinstance(ulid_factory(), MonotonicULIDGenerator)

    def test_monotonic_false(self):
        assert isinstance(ulid_factory({"monotonic": False}), NonMonotonicULIDGenerator)

    def test_monotonic_true(self):
        assert isinstance(ulid_factory(FactoryOptions(monotonic=True)), MonotonicULIDGenerator)

    def test_result_is_callable(self):
        gen = ulid_factory()
        assert callable(gen)
        assert ULID_RE.match(gen())

    def test_unknown_option_rejected(self):
        with pytest.raises(ValidationError):
            ulid_factory({"monotonic": True, "seed": 1})

    def test_non_bool_rejected(self):
        with pytest.raises(ValidationError):
            ulid_factory({"monotonic": "yes"})

    def test_instances_do_not_share_state(self, zero_random):
        a = ulid_factory(random_source=zero_random)
        b = ulid_factory(random_source=zero_random)
        assert a(1000) == b(1000)
        assert a(1000) == b(1000)


class TestNonMonotonic:
    """Test the stateless generator."""

    @pytest.fixture
    def gen(self, zero_random, frozen_clock):
        return ulid_factory({"monotonic": False}, random_source=zero_random, clock=frozen_clock)

    def test_length(self, gen):
        assert len(gen()) == 26

    def test_time_component(self, gen):
        assert gen(1469918176385)[:10] == "01ARYZ6S41"

    def test_frozen_seed_and_randomness_repeat(self, gen):
        for _ in range(10):
            assert gen(164436145) == "00004WT65H0000000000000000"

    def test_frozen_clock_repeats(self, gen):
        for _ in range(10):
            assert gen() == "01ARYZ6S410000000000000000"

    def test_zero_is_an_explicit_timestamp(self, gen):
        assert gen(0) == "0" * 26

    def test_invalid_timestamp(self, gen):
        with pytest.raises(ULIDRangeError, match="cannot encode a timestamp larger than"):
            gen(2**48)
        with pytest.raises(ULIDTypeError):
            gen("now")

    def test_round_trip(self):
        gen = ulid_factory({"monotonic": False})
        assert decode_time(gen(1_700_000_000_123)) == 1_700_000_000_123

    def test_counts_generated(self, gen):
        gen()
        gen()
        assert get_counter("ulid.generated") == 2


class TestMonotonicWithSeedTime:
    """Test monotonic generation with explicit timestamps."""

    def test_sequence_at_same_timestamp(self, zero_random):
        gen = ulid_factory({"monotonic": True}, random_source=zero_random)
        assert gen(164436145) == "00004WT65H0000000000000000"
        assert gen(164436145) == "00004WT65H0000000000000001"
        assert gen(164436145) == "00004WT65H0000000000000002"
        assert gen(164436145) == "00004WT65H0000000000000003"

    def test_earlier_timestamps_hold_last_time(self, zero_random):
        gen = ulid_factory(random_source=zero_random)
        assert gen(1469918176385) == "01ARYZ6S410000000000000000"
        assert gen(1469918176385) == "01ARYZ6S410000000000000001"
        assert gen(100) == "01ARYZ6S410000000000000002"
        assert gen(1469918176384) == "01ARYZ6S410000000000000003"
        assert gen.last_timestamp == 1469918176385
        assert gen.last_random == "0000000000000003"

    def test_forward_progress_draws_fresh_random(self, zero_random):
        gen = ulid_factory(random_source=zero_random)
        gen(1000)
        gen(1000)
        assert gen(1001) == "00000000Z90000000000000000"
        assert get_counter("ulid.monotonic.fresh") == 2
        assert get_counter("ulid.monotonic.increment") == 1

    def test_zero_on_fresh_generator(self, zero_random):
        gen = ulid_factory(random_source=zero_random)
        assert gen(0) == "0" * 26
        assert gen(0) == "0" * 25 + "1"

    def test_overflow_is_fatal(self):
        gen = MonotonicULIDGenerator(random_source=lambda n: b"\xff" * n)
        first = gen(5000)
        assert first.endswith("Z" * 16)
        with pytest.raises(ULIDOverflowError):
            gen(5000)
        # State is left untouched by the failed call
        assert gen.last_random == "Z" * 16
        assert gen(5001) > first

    def test_invalid_timestamp_leaves_state(self, zero_random):
        gen = ulid_factory(random_source=zero_random)
        gen(1000)
        with pytest.raises(ULIDRangeError):
            gen(-1)
        assert gen.last_timestamp == 1000
        assert gen(1000).endswith("0001")

    def test_clock_regression_logged_and_counted(self, zero_random):
        with capture_logs() as logs:
            gen = ulid_factory(random_source=zero_random)
            gen(2000)
            gen(1000)
        assert get_counter("ulid.monotonic.clock_regressed") == 1
        regressed = [e for e in logs if e["event"] == "ulid.monotonic.clock_regressed"]
        assert len(regressed) == 1
        assert regressed[0]["requested_ms"] == 1000
        assert regressed[0]["last_timestamp"] == 2000


class TestMonotonicWithoutSeedTime:
    """Test monotonic generation driven by the clock."""

    def test_frozen_clock(self, zero_random, frozen_clock):
        gen = ulid_factory({"monotonic": True}, random_source=zero_random, clock=frozen_clock)
        assert gen() == "01ARYZ6S410000000000000000"
        assert gen() == "01ARYZ6S410000000000000001"
        assert gen() == "01ARYZ6S410000000000000002"
        assert gen() == "01ARYZ6S410000000000000003"

    def test_real_clock_and_randomness_strictly_increase(self):
        gen = ulid_factory()
        ids = [gen() for _ in range(2000)]
        assert ids == sorted(ids)
        assert len(set(ids)) == len(ids)
        assert all(ULID_RE.match(i) for i in ids)

    def test_thread_safe(self):
        gen = ulid_factory()
        results: list[list[str]] = []
        lock = threading.Lock()

        def worker() -> None:
            ids = [gen() for _ in range(200)]
            with lock:
                results.append(ids)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        flat = [i for ids in results for i in ids]
        assert len(flat) == 1600
        assert len(set(flat)) == 1600
        for ids in results:
            assert ids == sorted(ids)


def test_module_level_ulid():
    value = ulid()
    assert ULID_RE.match(value)
    assert ulid(1469918176385)[:10] == "01ARYZ6S41"
    assert all(c in ENCODING for c in value)


def test_generator_creation_logged():
    with capture_logs() as logs:
        ulid_factory({"monotonic": False})
    assert logs == [
        {"event": "ulid.generator.created", "monotonic": False, "log_level": "debug"}
    ]
