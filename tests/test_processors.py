import pytest

from gnssrx.bytedata import ByteData
from gnssrx.headers import EphemerisHeader, HandoverWordHeader, SatClockHeader
from gnssrx.processors import (
    EphemerisProcessor,
    SatClockProcessor,
    SubframeProcessor,
    SubframeType,
)
from gnssrx.storage import CommonGPSSatelliteStorage

PAYLOAD_1 = bytes(range(1, 25))
PAYLOAD_2 = bytes(range(100, 124))


def _how(subframe_id, b0=0x12, b1=0x34):
    return bytes([b0, b1, (subframe_id << 2) | 0x80])


def test_subframe_type_lookup_by_id():
    assert [SubframeType(i) for i in range(1, 6)] == [
        SubframeType.SAT_CLOCK,
        SubframeType.EPHEMERIS_1,
        SubframeType.EPHEMERIS_2,
        SubframeType.ALMANAC_1,
        SubframeType.ALMANAC_2,
    ]
    with pytest.raises(ValueError):
        SubframeType(6)


def test_sat_clock_processor_stores_header():
    storage = CommonGPSSatelliteStorage()
    assert SatClockProcessor(storage).on_data(ByteData(PAYLOAD_1), SubframeType.SAT_CLOCK)
    assert storage.satellite_clock == SatClockHeader.from_bytes(PAYLOAD_1)


def test_sat_clock_processor_rejects_short_data():
    storage = CommonGPSSatelliteStorage()
    assert not SatClockProcessor(storage).on_data(ByteData(PAYLOAD_1[:10]), SubframeType.SAT_CLOCK)
    assert storage.satellite_clock is None


def test_ephemeris_joins_two_fragments():
    storage = CommonGPSSatelliteStorage()
    processor = EphemerisProcessor(storage)
    assert processor.on_data(ByteData(PAYLOAD_1), SubframeType.EPHEMERIS_1)
    assert storage.ephemeris is None
    assert processor.on_data(ByteData(PAYLOAD_2), SubframeType.EPHEMERIS_2)
    assert storage.ephemeris == EphemerisHeader.from_bytes(PAYLOAD_1 + PAYLOAD_2)


def test_ephemeris_second_without_first_is_rejected():
    storage = CommonGPSSatelliteStorage()
    assert not EphemerisProcessor(storage).on_data(ByteData(PAYLOAD_2), SubframeType.EPHEMERIS_2)
    assert storage.ephemeris is None


def test_ephemeris_repeated_first_is_rejected():
    processor = EphemerisProcessor(CommonGPSSatelliteStorage())
    processor.on_data(ByteData(PAYLOAD_1), SubframeType.EPHEMERIS_1)
    assert not processor.on_data(ByteData(PAYLOAD_2), SubframeType.EPHEMERIS_1)


def test_ephemeris_empty_first_fragment_is_rejected():
    processor = EphemerisProcessor(CommonGPSSatelliteStorage())
    assert not processor.on_data(ByteData(), SubframeType.EPHEMERIS_1)


def test_ephemeris_other_type_is_rejected():
    processor = EphemerisProcessor(CommonGPSSatelliteStorage())
    assert not processor.on_data(ByteData(PAYLOAD_1), SubframeType.ALMANAC_1)


def test_ephemeris_clear_drops_first_fragment():
    storage = CommonGPSSatelliteStorage()
    processor = EphemerisProcessor(storage)
    processor.on_data(ByteData(PAYLOAD_1), SubframeType.EPHEMERIS_1)
    processor.clear()
    assert not processor.on_data(ByteData(PAYLOAD_2), SubframeType.EPHEMERIS_2)
    assert storage.ephemeris is None


def test_ephemeris_too_short_keeps_nothing():
    storage = CommonGPSSatelliteStorage()
    processor = EphemerisProcessor(storage)
    processor.on_data(ByteData(PAYLOAD_1), SubframeType.EPHEMERIS_1)
    assert not processor.on_data(ByteData(PAYLOAD_2[:5]), SubframeType.EPHEMERIS_2)
    assert storage.ephemeris is None


def test_subframe_processor_sets_z_counter_and_clock():
    storage = CommonGPSSatelliteStorage()
    processor = SubframeProcessor(storage)
    how = _how(SubframeType.SAT_CLOCK)
    assert processor.on_data(ByteData(how + PAYLOAD_1))
    assert storage.z_counter == HandoverWordHeader.from_bytes(how).z_counter
    assert storage.satellite_clock == SatClockHeader.from_bytes(PAYLOAD_1)
    values = processor.stat.values()
    assert values[SubframeProcessor.Key.RECEIVED_SUBFRAMES] == 1
    assert values[SubframeProcessor.Key.PRODUCED_SAT_CLOCK] == 1


def test_subframe_processor_consumes_handover_word():
    data = ByteData(_how(SubframeType.ALMANAC_1) + PAYLOAD_1)
    SubframeProcessor(CommonGPSSatelliteStorage()).on_data(data)
    assert bytes(data) == PAYLOAD_1


def test_subframe_processor_decodes_ephemeris():
    storage = CommonGPSSatelliteStorage()
    processor = SubframeProcessor(storage)
    assert processor.on_data(ByteData(_how(SubframeType.EPHEMERIS_1) + PAYLOAD_1))
    assert processor.on_data(ByteData(_how(SubframeType.EPHEMERIS_2) + PAYLOAD_2))
    assert storage.ephemeris == EphemerisHeader.from_bytes(PAYLOAD_1 + PAYLOAD_2)


@pytest.mark.parametrize(
    ("subframe_type", "key"),
    [
        (SubframeType.ALMANAC_1, SubframeProcessor.Key.PRODUCED_ALMANAC_1),
        (SubframeType.ALMANAC_2, SubframeProcessor.Key.PRODUCED_ALMANAC_2),
    ],
)
def test_almanac_is_counted(subframe_type, key):
    processor = SubframeProcessor(CommonGPSSatelliteStorage())
    assert processor.on_data(ByteData(_how(subframe_type) + PAYLOAD_1))
    assert processor.stat.values()[key] == 1


def test_unknown_subframe_id_is_accepted_but_not_dispatched():
    storage = CommonGPSSatelliteStorage()
    processor = SubframeProcessor(storage)
    how = _how(7)
    assert processor.on_data(ByteData(how + PAYLOAD_1))
    assert storage.z_counter == HandoverWordHeader.from_bytes(how).z_counter
    assert storage.satellite_clock is None
    values = processor.stat.values()
    assert values[SubframeProcessor.Key.RECEIVED_SUBFRAMES] == 1
    assert sum(values.values()) == 1


def test_subframe_processor_rejects_data_shorter_than_how():
    storage = CommonGPSSatelliteStorage()
    processor = SubframeProcessor(storage)
    assert not processor.on_data(ByteData(b"\x01\x02"))
    assert storage.z_counter == 0


def test_subframe_processor_clear_resets_stat():
    processor = SubframeProcessor(CommonGPSSatelliteStorage())
    processor.on_data(ByteData(_how(SubframeType.SAT_CLOCK) + PAYLOAD_1))
    processor.clear()
    assert set(processor.stat.values().values()) == {0}