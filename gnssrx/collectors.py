"""Stages that turn correlator samples into GPS navigation subframes."""

from __future__ import annotations

import logging
from enum import Enum, IntEnum, auto

from .bytedata import ByteData
from .stat import Stat

logger = logging.getLogger(__name__)

_SIGNALS_PER_BIT = 20
_WORD_SIZE = 3
_SUBFRAME_SIZE = 30
_PARITY_BITS = 6
_PARITY_MATRIX = (0xEC7CD2, 0x763E69, 0xBB1F34, 0x5D8F9A, 0xAEC7CD, 0x2DEA27)
_ROWS_USING_D29 = frozenset({0, 2, 5})


class BitCollector:
    """Integrates 1 ms samples into navigation bits (20 samples per bit)."""

    class Key(IntEnum):
        RECEIVED_SIGNALS = 0
        COLLECTED_BITS = 1
        BIT_ERRORS = 2

    def __init__(self) -> None:
        self._cross_time = 0
        self._gave_sequence = False
        self._bits: list[int] = []
        self._signal_sum = 1.0
        self.stat = Stat(
            "Bit collector",
            {
                self.Key.RECEIVED_SIGNALS: "Received signals",
                self.Key.COLLECTED_BITS: "Collected bits",
                self.Key.BIT_ERRORS: "Bit errors",
            },
        )

    def collect_signal(self, signal: float) -> None:
        """Feed one sample of the correlator output."""
        self.stat.increment(self.Key.RECEIVED_SIGNALS)
        crossed = (signal > 0 and self._signal_sum < 0) or (signal < 0 and self._signal_sum > 0)
        if crossed or self._cross_time == _SIGNALS_PER_BIT:
            self._finish_bit()
        self._signal_sum += signal
        self._cross_time += 1

    def bit_sequence(self) -> list[int]:
        """Return the bits completed since the previous call, once."""
        if self._gave_sequence:
            return []
        self._gave_sequence = True
        return list(self._bits)

    def clear(self) -> None:
        self._gave_sequence = False
        self._bits.clear()
        self.stat.clear()

    def _finish_bit(self) -> None:
        if self._gave_sequence:
            self._gave_sequence = False
            self._bits.clear()

        if self._cross_time >= _SIGNALS_PER_BIT:
            mean = self._signal_sum / _SIGNALS_PER_BIT
            self._bits.append(0 if mean > 0 else 1)
            self.stat.increment(self.Key.COLLECTED_BITS)
        else:
            self.stat.increment(self.Key.BIT_ERRORS)
            logger.warning("Signal is crossed too early; distance = %d", self._cross_time)
        self._signal_sum = 0.0
        self._cross_time = 0


class ByteCollector:
    """Packs bits, most significant first, into bytes."""

    def __init__(self) -> None:
        self._byte = 0
        self._filled = 0

    def make_byte(self, bit: int) -> int | None:
        """Add a bit; return the byte once eight bits are in, else None."""
        if self._filled == 8:
            self.clear()
        if bit:
            self._byte += 1 << (7 - self._filled)
        self._filled += 1
        return self._byte if self._filled == 8 else None

    def clear(self) -> None:
        self._filled = 0
        self._byte = 0


class SyncrobyteSeeker:
    """Watches the bit stream for the telemetry word preamble."""

    PREAMBLE = 0b1000_1011

    def __init__(self) -> None:
        self._last_byte = 0

    def reached_synchronization(self, bit: int) -> bool:
        """Shift in a bit; return True when the last eight bits are the preamble."""
        self._last_byte = ((self._last_byte << 1) | (1 if bit else 0)) & 0xFF
        return self._last_byte == self.PREAMBLE

    def clear(self) -> None:
        self._last_byte = 0


class CollectResult(Enum):
    """Outcome of feeding one bit to a word collector."""

    OK = auto()
    STILL_COLLECTING = auto()
    PARITY_ERROR = auto()


class ParityValidator:
    """Collects the six parity bits of a word and checks them."""

    def __init__(self) -> None:
        self._parity = 0
        self._filled = 0
        self._d29 = 0
        self._d30 = 0

    def validate(self, bit: int, word: ByteData) -> CollectResult:
        """Add a parity bit; on the sixth, check ``word`` (inverting it if required)."""
        if bit:
            self._parity += 1 << (_PARITY_BITS - 1 - self._filled)
        self._filled += 1
        if self._filled != _PARITY_BITS:
            return CollectResult.STILL_COLLECTING
        return CollectResult.OK if self._check(word) else CollectResult.PARITY_ERROR

    def clear(self) -> None:
        self._parity = 0
        self._filled = 0

    def _check(self, word: ByteData) -> bool:
        if len(word) != _WORD_SIZE:
            logger.error("Built word has invalid size!")
            return False
        data = int.from_bytes(bytes(word), "big")
        if self._d30 == 1:
            data = ~data & 0xFFFFFF
            word.invert()

        expected = 0
        for row, mask in enumerate(_PARITY_MATRIX):
            bit = bin(mask & data).count("1") % 2
            bit ^= self._d29 if row in _ROWS_USING_D29 else self._d30
            expected |= bit << (_PARITY_BITS - 1 - row)

        self._d29 = (self._parity & 0x02) >> 1
        self._d30 = self._parity & 0x01
        return expected == self._parity


class _Stage(Enum):
    PAYLOAD = auto()
    PARITY = auto()


class WordCollector:
    """Assembles 30-bit navigation words: 24 data bits and 6 parity bits."""

    def __init__(self) -> None:
        self._stage = _Stage.PAYLOAD
        self._word = ByteData()
        self._byte_collector = ByteCollector()
        self._parity = ParityValidator()

    def collect_bit(self, bit: int) -> tuple[CollectResult, ByteData | None]:
        """Feed a bit; return the result and, once a word is complete, its data."""
        if self._stage is _Stage.PAYLOAD:
            self._build_payload(bit)
            return CollectResult.STILL_COLLECTING, None

        result = self._parity.validate(bit, self._word)
        if result is CollectResult.STILL_COLLECTING:
            return result, None
        word = ByteData(self._word)
        self._word.clear()
        self._stage = _Stage.PAYLOAD
        return result, word

    def mention_bytes(self, data: bytes | ByteData) -> None:
        """Add bytes already received by other means to the current word."""
        self._word.append(data)

    def clear(self) -> None:
        self._stage = _Stage.PAYLOAD
        self._word.clear()
        self._byte_collector.clear()
        self._parity.clear()

    def _build_payload(self, bit: int) -> None:
        byte = self._byte_collector.make_byte(bit)
        if byte is None:
            return
        self._word.append(bytes([byte]))
        if len(self._word) == _WORD_SIZE:
            self._stage = _Stage.PARITY
            self._parity.clear()


class CollectorState(Enum):
    """Synchronisation state of the subframe collector."""

    OFF = auto()
    SYNCHRONIZING = auto()
    OPERATION = auto()


class SubframeCollector:
    """Finds subframe boundaries and yields subframes without the telemetry word."""

    class Key(IntEnum):
        RECEIVED_BITS = 0
        PRODUCED_WORDS = 1
        PRODUCED_SUBFRAMES = 2
        TLM_SYNCHRONIZATION_ERRORS = 3
        PARITY_ERRORS = 4

    def __init__(self) -> None:
        self._subframe = ByteData()
        self._seeker = SyncrobyteSeeker()
        self._words = WordCollector()
        self._state = CollectorState.OFF
        self.stat = Stat(
            "Subframe collector",
            {
                self.Key.RECEIVED_BITS: "Received bits",
                self.Key.PRODUCED_WORDS: "Produced words",
                self.Key.PRODUCED_SUBFRAMES: "Produced subframes",
                self.Key.TLM_SYNCHRONIZATION_ERRORS: "TLM synchronization errors",
                self.Key.PARITY_ERRORS: "Parity errors",
            },
        )

    @property
    def state(self) -> CollectorState:
        return self._state

    def make_subframe(self, bit: int) -> ByteData | None:
        """Feed a bit; return the 27-byte subframe body when one completes."""
        self.stat.increment(self.Key.RECEIVED_BITS)
        if self._state is CollectorState.OFF:
            self._state = CollectorState.SYNCHRONIZING
            logger.info("Subframe collector is now SYNCHRONIZING")
            self._subframe.clear()
            self._seeker.clear()

        if self._state is CollectorState.SYNCHRONIZING:
            self._synchronize(bit)
            return None

        self._operate(bit)
        if len(self._subframe) < _SUBFRAME_SIZE:
            return None
        self.stat.increment(self.Key.PRODUCED_SUBFRAMES)
        self._subframe.remove_left(_WORD_SIZE)
        subframe = ByteData(self._subframe)
        self._subframe.clear()
        return subframe

    def clear(self) -> None:
        self._state = CollectorState.OFF
        self._seeker.clear()
        self._words.clear()
        self._subframe.clear()
        self.stat.clear()

    def _synchronize(self, bit: int) -> None:
        if self._seeker.reached_synchronization(bit):
            self._state = CollectorState.OPERATION
            self._words.clear()
            self._words.mention_bytes(bytes([SyncrobyteSeeker.PREAMBLE]))
            logger.info("Subframe collector is now OPERATION")

    def _operate(self, bit: int) -> None:
        result, word = self._words.collect_bit(bit)
        if result is CollectResult.OK and word is not None:
            self.stat.increment(self.Key.PRODUCED_WORDS)
            if len(self._subframe) == 0 and word[0] != SyncrobyteSeeker.PREAMBLE:
                self.stat.increment(self.Key.TLM_SYNCHRONIZATION_ERRORS)
                self._state = CollectorState.OFF
                logger.warning("New subframe preamble is missed")
            self._subframe.append(word)
        elif result is CollectResult.PARITY_ERROR:
            self.stat.increment(self.Key.PRODUCED_WORDS)
            self.stat.increment(self.Key.PARITY_ERRORS)
            self._state = CollectorState.OFF
            logger.warning("Word parity validation error happened")