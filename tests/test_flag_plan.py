import logging

import pytest

from unxbits.binary.codecs.flag_plan import FlagField, PlanError, build_plan, decode_word, field, flag
from unxbits.binary.selector import BitRange


def test_decode_word_flags_and_fields():
    plan = build_plan("demo", 16, (flag("a", 0), field("mid", 2, 5), flag("top", 15)))
    out = decode_word(0b1000_0000_0110_1101, plan)
    assert out.fields == {"a": True, "mid": 0b1011, "top": True}
    assert out.width_bits == 16
    assert out.reserved_set is True


def test_reserved_bits_are_logged_not_raised(caplog):
    plan = build_plan("demo", 8, (flag("a", 0),))
    with caplog.at_level(logging.DEBUG, logger="unxbits.binary.codecs.flag_plan"):
        out = decode_word(0b1000_0001, plan)
    assert out["a"] is True
    assert "reserved bits set" in caplog.text


def test_word_wider_than_plan():
    plan = build_plan("demo", 8, (flag("a", 0),))
    with pytest.raises(ValueError):
        decode_word(0x100, plan)


@pytest.mark.parametrize("fields", [
    (flag("a", 0), flag("a", 1)),
    (flag("a", 8),),
    (field("a", 6, 9),),
    (flag("a", -1),),
    (field("a", 0, 3), flag("b", 2)),
    (field("a", 5, 4),),
    (flag("a", True),),
    (FlagField("a", BitRange(1.5, 2)),),
])
def test_bad_plans(fields):
    with pytest.raises(PlanError):
        build_plan("bad", 8, fields)


def test_plan_json_dump():
    plan = build_plan("demo", 8, (flag("a", 0), field("b", 1, 3)))
    dumped = decode_word(0b0101, plan).model_dump(mode="json")
    assert dumped == {
        "plan": "demo", "word": 5, "width_bits": 8,
        "fields": {"a": True, "b": 2}, "reserved_set": False,
    }
