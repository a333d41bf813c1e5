"""ULID generators.

Two variants share one calling convention, ``generate(timestamp=None)``:

- ``MonotonicULIDGenerator`` keeps the last timestamp and random suffix. When
  the clock stalls or moves backwards it reuses the last timestamp and adds
  one to the suffix, so its output always sorts strictly after the previous
  ID. More than 2**80 IDs within one stalled millisecond raises
  ``ULIDOverflowError`` instead of wrapping.
- ``NonMonotonicULIDGenerator`` is stateless; IDs sharing a millisecond
  come out in random order.

``ulid_factory`` picks a variant from its ``monotonic`` option.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field

from ulid_workers.base32 import RANDOM_LEN, TIME_LEN, increment_base32
from ulid_workers.config import Settings, load_settings
from ulid_workers.entropy import RandomSource, crypto_random_bytes, encode_random
from ulid_workers.metrics import inc_counter
from ulid_workers.timestamp import current_millis, encode_time, validate_timestamp

Clock = Callable[[], int]


class FactoryOptions(BaseModel):
    """Options accepted by ``ulid_factory``; nothing else is recognised."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    monotonic: bool = Field(default=True, strict=True)


class ULIDGenerator:
    """Shared plumbing: timestamp resolution and injected capabilities."""

    monotonic: bool = False

    def __init__(
        self,
        random_source: RandomSource | None = None,
        clock: Clock | None = None,
    ):
        self._random_source = random_source or crypto_random_bytes
        self._clock = clock or current_millis
        # Routed through stdlib so unconfigured applications see no DEBUG output
        self._log = structlog.wrap_logger(
            logging.getLogger(__name__), wrapper_class=structlog.stdlib.BoundLogger
        )
        self._log.debug("ulid.generator.created", monotonic=self.monotonic)

    def _resolve(self, timestamp: Any) -> int:
        if timestamp is None:
            timestamp = self._clock()
        validate_timestamp(timestamp)
        return int(timestamp)

    def generate(self, timestamp: Any = None) -> str:
        raise NotImplementedError

    def __call__(self, timestamp: Any = None) -> str:
        return self.generate(timestamp)


class NonMonotonicULIDGenerator(ULIDGenerator):
    monotonic = False

    def generate(self, timestamp: Any = None) -> str:
        """Return a fresh ULID for ``timestamp`` (or now)."""
        resolved = self._resolve(timestamp)
        inc_counter("ulid.generated")
        return encode_time(resolved, TIME_LEN) + encode_random(RANDOM_LEN, self._random_source)


class MonotonicULIDGenerator(ULIDGenerator):
    monotonic = True

    def __init__(
        self,
        random_source: RandomSource | None = None,
        clock: Clock | None = None,
    ):
        super().__init__(random_source=random_source, clock=clock)
        self._lock = threading.Lock()
        self._last_timestamp: int | None = None
        self._last_random: str | None = None

    @property
    def last_timestamp(self) -> int | None:
        return self._last_timestamp

    @property
    def last_random(self) -> str | None:
        return self._last_random

    def generate(self, timestamp: Any = None) -> str:
        """Return a ULID sorting strictly after every earlier one from this instance.

        Args:
            timestamp: Milliseconds since the epoch; ``None`` reads the clock

        Raises:
            ULIDTypeError, ULIDRangeError, ULIDValueError: invalid timestamp
            ULIDOverflowError: random suffix exhausted at a stalled timestamp
        """
        resolved = self._resolve(timestamp)
        with self._lock:
            last = self._last_timestamp
            if last is None or resolved > last:
                random_part = encode_random(RANDOM_LEN, self._random_source)
                self._last_timestamp = resolved
                self._last_random = random_part
                inc_counter("ulid.monotonic.fresh")
            else:
                if resolved < last:
                    inc_counter("ulid.monotonic.clock_regressed")
                    self._log.debug(
                        "ulid.monotonic.clock_regressed", requested_ms=resolved, last_timestamp=last
                    )
                self._last_random = increment_base32(self._last_random)
                inc_counter("ulid.monotonic.increment")
            inc_counter("ulid.generated")
            return encode_time(self._last_timestamp, TIME_LEN) + self._last_random


def ulid_factory(
    options: FactoryOptions | Mapping[str, Any] | None = None,
    *,
    random_source: RandomSource | None = None,
    clock: Clock | None = None,
) -> ULIDGenerator:
    """Build a generator; monotonic unless ``options`` say otherwise.

    ``random_source`` and ``clock`` replace the OS CSPRNG and wall clock,
    mainly for deterministic tests.
    """
    if options is None:
        options = FactoryOptions()
    elif not isinstance(options, FactoryOptions):
        options = FactoryOptions.model_validate(dict(options))
    cls = MonotonicULIDGenerator if options.monotonic else NonMonotonicULIDGenerator
    return cls(random_source=random_source, clock=clock)


def ulid_factory_from_settings(settings: Settings | None = None, **kwargs: Any) -> ULIDGenerator:
    settings = settings or load_settings()
    return ulid_factory(FactoryOptions(monotonic=settings.monotonic), **kwargs)


_default: NonMonotonicULIDGenerator | None = None


def ulid(timestamp: Any = None) -> str:
    """Generate one non-monotonic ULID with the default random source."""
    global _default
    if _default is None:
        _default = NonMonotonicULIDGenerator()
    return _default.generate(timestamp)
