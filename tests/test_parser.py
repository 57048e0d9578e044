import pytest

from gnssrx.collectors import BitCollector, SubframeCollector
from gnssrx.parser import GPSFrameParser, make_parser
from gnssrx.processors import SubframeProcessor
from gnssrx.storage import CommonGPSSatelliteStorage, SatelliteStorage

PREAMBLE_BITS = [1, 0, 0, 0, 1, 0, 1, 1]


def _samples(bits):
    samples = []
    for bit in bits:
        samples.extend([1.0 if bit == 0 else -1.0] * 20)
    samples.append(1.0)
    return samples


def _feed(parser, samples):
    for value in samples:
        parser.handle_signal(value)


def test_make_parser_for_gps_storage():
    parser = make_parser(CommonGPSSatelliteStorage())
    assert isinstance(parser, GPSFrameParser)
    parser.handle_signal(1.0)
    assert parser.stat()[0].values()[BitCollector.Key.RECEIVED_SIGNALS] == 1


def test_make_parser_rejects_unknown_storage():
    with pytest.raises(ValueError):
        make_parser(SatelliteStorage())


def test_stat_lists_all_stages():
    parser = make_parser(CommonGPSSatelliteStorage())
    names = [stat.name for stat in parser.stat()]
    assert names == ["Bit collector", "Subframe collector", "Subframe parser"]


def test_received_signals_counted():
    parser = make_parser(CommonGPSSatelliteStorage())
    samples = _samples([0, 1, 0])
    _feed(parser, samples)
    bit_stat = parser.stat()[0]
    assert bit_stat.values()[BitCollector.Key.RECEIVED_SIGNALS] == len(samples)


def test_one_word_after_preamble():
    parser = make_parser(CommonGPSSatelliteStorage())
    bits = [0, 0] + PREAMBLE_BITS + [0] * 22
    _feed(parser, _samples(bits))
    bit_stat, subframe_stat, processor_stat = parser.stat()

    assert bit_stat.values()[BitCollector.Key.COLLECTED_BITS] == len(bits)
    assert bit_stat.values()[BitCollector.Key.BIT_ERRORS] == 0
    assert subframe_stat.values()[SubframeCollector.Key.RECEIVED_BITS] == len(bits)
    assert subframe_stat.values()[SubframeCollector.Key.PRODUCED_WORDS] == 1
    assert subframe_stat.values()[SubframeCollector.Key.TLM_SYNCHRONIZATION_ERRORS] == 0
    assert processor_stat.values()[SubframeProcessor.Key.RECEIVED_SUBFRAMES] == 0


def test_clear_resets_statistics():
    parser = make_parser(CommonGPSSatelliteStorage())
    _feed(parser, _samples([0, 0] + PREAMBLE_BITS + [1] * 10))
    assert any(v for stat in parser.stat() for v in stat.values().values())
    parser.clear()
    assert all(v == 0 for stat in parser.stat() for v in stat.values().values())


def test_storage_untouched_without_subframes():
    storage = CommonGPSSatelliteStorage()
    parser = make_parser(storage)
    _feed(parser, _samples([0, 1, 1, 0, 1]))
    assert storage == CommonGPSSatelliteStorage()